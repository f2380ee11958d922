"""Post service layer: the feed, likes and comments."""

from typing import Callable, List
from uuid import UUID

import structlog

from core.exceptions import (
    CommentNotFoundError,
    NotAuthorizedError,
    PostAlreadyLikedError,
    PostNotFoundError,
    PostNotLikedError,
    UserNotFoundError,
)
from core.ids import parse_id
from domain.entities.post import Comment, Like, Post
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class PostService:
    """Service layer for Post business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create_post(self, user_id: UUID, text: str) -> Post:
        """Create a post carrying a snapshot of the author's name and avatar."""
        async with self._uow_factory() as uow:
            author = await self._require_user(uow, user_id)
            post = Post(
                user_id=user_id,
                text=text,
                name=author.name,
                avatar=author.avatar,
            )
            created = await uow.posts.create(post)
            await uow.commit()

        logger.info("post_created", post_id=str(created.id), user_id=str(user_id))
        return created

    async def list_posts(self) -> List[Post]:
        """Get all posts, newest first."""
        async with self._uow_factory() as uow:
            return await uow.posts.get_all()  # type: ignore[no-any-return]

    async def get_post(self, post_id: str) -> Post:
        """Get a single post."""
        async with self._uow_factory() as uow:
            return await self._require_post(uow, post_id)

    async def delete_post(self, user_id: UUID, post_id: str) -> None:
        """Delete a post owned by the caller."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            if post.user_id != user_id:
                raise NotAuthorizedError()

            await uow.posts.delete(post.id)
            await uow.commit()

        logger.info("post_deleted", post_id=post_id, user_id=str(user_id))

    async def like_post(self, user_id: UUID, post_id: str) -> List[Like]:
        """Add the caller's like and return the updated like list."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            if post.is_liked_by(user_id):
                raise PostAlreadyLikedError(post_id)

            post.add_like(user_id)
            updated = await uow.posts.update(post)
            await uow.commit()
            return updated.likes

    async def unlike_post(self, user_id: UUID, post_id: str) -> List[Like]:
        """Remove the caller's like and return the updated like list."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            if not post.is_liked_by(user_id):
                raise PostNotLikedError(post_id)

            post.remove_like(user_id)
            updated = await uow.posts.update(post)
            await uow.commit()
            return updated.likes

    async def add_comment(self, user_id: UUID, post_id: str, text: str) -> List[Comment]:
        """Prepend a comment by the caller and return all comments."""
        async with self._uow_factory() as uow:
            author = await self._require_user(uow, user_id)
            post = await self._require_post(uow, post_id)

            post.add_comment(
                Comment(
                    user_id=user_id,
                    text=text,
                    name=author.name,
                    avatar=author.avatar,
                )
            )
            updated = await uow.posts.update(post)
            await uow.commit()
            return updated.comments

    async def remove_comment(
        self, user_id: UUID, post_id: str, comment_id: str
    ) -> List[Comment]:
        """Delete one of the caller's comments, matched by comment id."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)

            parsed = parse_id(comment_id)
            comment = post.find_comment(parsed) if parsed else None
            if not comment:
                raise CommentNotFoundError(comment_id)
            if comment.user_id != user_id:
                raise NotAuthorizedError()

            post.remove_comment(comment.id)
            updated = await uow.posts.update(post)
            await uow.commit()
            return updated.comments

    async def _require_post(self, uow: IUnitOfWork, post_id: str) -> Post:
        parsed = parse_id(post_id)
        post = await uow.posts.get(parsed) if parsed else None
        if not post:
            raise PostNotFoundError(post_id)
        return post

    async def _require_user(self, uow: IUnitOfWork, user_id: UUID) -> User:
        user = await uow.users.get(user_id)
        if not user:
            raise UserNotFoundError(str(user_id))
        return user
