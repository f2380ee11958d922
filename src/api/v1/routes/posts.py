"""Post API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_post_service
from api.v1.schemas.common import ErrorResponse, MessageResponse
from api.v1.schemas.post import (
    TEXT_RULES,
    CommentCreate,
    CommentResponse,
    LikeResponse,
    PostCreate,
    PostResponse,
)
from api.validation import ValidatedBody
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.post import Comment, Like, Post
from domain.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post(
    "",
    response_model=PostResponse,
    summary="Create a post",
    responses={400: {"model": ErrorResponse, "description": "Text is required"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_post(
    request: Request,
    user: CurrentUser,
    body: Annotated[PostCreate, Depends(ValidatedBody(PostCreate, TEXT_RULES))],
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Create a post signed with the caller's current name and avatar."""
    post = await service.create_post(user.id, body.text)
    return _build_post_response(post)


@router.get(
    "",
    response_model=list[PostResponse],
    summary="List all posts",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_posts(
    request: Request,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[PostResponse]:
    """Get all posts, newest first."""
    posts = await service.list_posts()
    return [_build_post_response(p) for p in posts]


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    summary="Get a post",
    responses={404: {"model": ErrorResponse, "description": "Post not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_post(
    request: Request,
    post_id: str,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Get a single post by ID."""
    post = await service.get_post(post_id)
    return _build_post_response(post)


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    summary="Delete a post",
    responses={
        401: {"model": ErrorResponse, "description": "Caller does not own the post"},
        404: {"model": ErrorResponse, "description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_post(
    request: Request,
    post_id: str,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> MessageResponse:
    """Delete one of the caller's posts."""
    await service.delete_post(user.id, post_id)
    return MessageResponse(msg="Post removed")


@router.put(
    "/like/{post_id}",
    response_model=list[LikeResponse],
    summary="Like a post",
    responses={400: {"model": ErrorResponse, "description": "Post already liked"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def like_post(
    request: Request,
    post_id: str,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[LikeResponse]:
    """Like a post and return its likes."""
    likes = await service.like_post(user.id, post_id)
    return _build_like_responses(likes)


@router.put(
    "/unlike/{post_id}",
    response_model=list[LikeResponse],
    summary="Unlike a post",
    responses={400: {"model": ErrorResponse, "description": "Post has not yet been liked"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def unlike_post(
    request: Request,
    post_id: str,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[LikeResponse]:
    """Remove the caller's like and return the remaining likes."""
    likes = await service.unlike_post(user.id, post_id)
    return _build_like_responses(likes)


@router.post(
    "/comment/{post_id}",
    response_model=list[CommentResponse],
    summary="Comment on a post",
    responses={
        400: {"model": ErrorResponse, "description": "Text is required"},
        404: {"model": ErrorResponse, "description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_comment(
    request: Request,
    post_id: str,
    user: CurrentUser,
    body: Annotated[CommentCreate, Depends(ValidatedBody(CommentCreate, TEXT_RULES))],
    service: PostService = Depends(get_post_service),
) -> list[CommentResponse]:
    """Add a comment and return all comments, newest first."""
    comments = await service.add_comment(user.id, post_id, body.text)
    return _build_comment_responses(comments)


@router.delete(
    "/comment/{post_id}/{comment_id}",
    response_model=list[CommentResponse],
    summary="Delete a comment",
    responses={
        401: {"model": ErrorResponse, "description": "Caller did not write the comment"},
        404: {"model": ErrorResponse, "description": "Post or comment not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_comment(
    request: Request,
    post_id: str,
    comment_id: str,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[CommentResponse]:
    """Delete one of the caller's comments and return the remaining ones."""
    comments = await service.remove_comment(user.id, post_id, comment_id)
    return _build_comment_responses(comments)


def _build_like_responses(likes: list[Like]) -> list[LikeResponse]:
    return [LikeResponse(user=like.user_id) for like in likes]


def _build_comment_responses(comments: list[Comment]) -> list[CommentResponse]:
    return [
        CommentResponse(
            id=c.id,
            user=c.user_id,
            text=c.text,
            name=c.name,
            avatar=c.avatar,
            date=c.created_at,
        )
        for c in comments
    ]


def _build_post_response(post: Post) -> PostResponse:
    """Convert a Post entity into its API representation."""
    return PostResponse(
        id=post.id,
        user=post.user_id,
        text=post.text,
        name=post.name,
        avatar=post.avatar,
        likes=_build_like_responses(post.likes),
        comments=_build_comment_responses(post.comments),
        date=post.created_at,
    )
