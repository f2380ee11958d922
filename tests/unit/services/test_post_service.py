"""Unit tests for PostService."""

from uuid import UUID, uuid4

import pytest

from core.exceptions import (
    CommentNotFoundError,
    NotAuthorizedError,
    PostAlreadyLikedError,
    PostNotFoundError,
    PostNotLikedError,
    UserNotFoundError,
)
from domain.entities.post import Comment, Like, Post
from domain.entities.user import User
from domain.services.post_service import PostService
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> PostService:
    uow.posts.create.side_effect = lambda post: post
    uow.posts.update.side_effect = lambda post: post
    return PostService(lambda: uow)


def _post(owner_id: UUID, **kwargs) -> Post:
    return Post(user_id=owner_id, text="Hello", name="Alice", avatar="https://a/1", **kwargs)


# --- create_post ---


class TestCreatePost:
    @pytest.mark.asyncio
    async def test_snapshots_author_name_and_avatar(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, author: User
    ):
        uow.users.get.return_value = author

        result = await service.create_post(user_id, "First post")

        assert result.user_id == user_id
        assert result.text == "First post"
        assert result.name == author.name
        assert result.avatar == author.avatar
        assert result.likes == []
        assert result.comments == []
        assert uow.committed

    @pytest.mark.asyncio
    async def test_raises_when_author_missing(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.users.get.return_value = None

        with pytest.raises(UserNotFoundError):
            await service.create_post(user_id, "orphan")

        uow.posts.create.assert_not_called()


# --- get_post / delete_post ---


class TestGetPost:
    @pytest.mark.asyncio
    async def test_returns_post(self, service: PostService, uow: FakeUnitOfWork, user_id: UUID):
        post = _post(user_id)
        uow.posts.get.return_value = post

        assert await service.get_post(str(post.id)) is post
        uow.posts.get.assert_awaited_once_with(post.id)

    @pytest.mark.asyncio
    async def test_malformed_id_is_not_found(self, service: PostService, uow: FakeUnitOfWork):
        with pytest.raises(PostNotFoundError) as exc_info:
            await service.get_post("123")

        assert exc_info.value.status_code == 404
        uow.posts.get.assert_not_called()


class TestDeletePost:
    @pytest.mark.asyncio
    async def test_owner_can_delete(self, service: PostService, uow: FakeUnitOfWork, user_id: UUID):
        post = _post(user_id)
        uow.posts.get.return_value = post

        await service.delete_post(user_id, str(post.id))

        uow.posts.delete.assert_awaited_once_with(post.id)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_non_owner_is_not_authorized(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, other_user_id: UUID
    ):
        post = _post(other_user_id)
        uow.posts.get.return_value = post

        with pytest.raises(NotAuthorizedError) as exc_info:
            await service.delete_post(user_id, str(post.id))

        assert exc_info.value.status_code == 401
        uow.posts.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_post(self, service: PostService, uow: FakeUnitOfWork, user_id: UUID):
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.delete_post(user_id, str(uuid4()))


# --- likes ---


class TestLikes:
    @pytest.mark.asyncio
    async def test_like_prepends(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, other_user_id: UUID
    ):
        post = _post(other_user_id, likes=[Like(user_id=other_user_id)])
        uow.posts.get.return_value = post

        likes = await service.like_post(user_id, str(post.id))

        assert likes == [Like(user_id=user_id), Like(user_id=other_user_id)]
        assert uow.committed

    @pytest.mark.asyncio
    async def test_like_twice_raises(self, service: PostService, uow: FakeUnitOfWork, user_id: UUID):
        post = _post(user_id, likes=[Like(user_id=user_id)])
        uow.posts.get.return_value = post

        with pytest.raises(PostAlreadyLikedError) as exc_info:
            await service.like_post(user_id, str(post.id))

        assert exc_info.value.message == "Post already liked"
        uow.posts.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_unlike_removes_only_callers_like(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, other_user_id: UUID
    ):
        post = _post(user_id, likes=[Like(user_id=user_id), Like(user_id=other_user_id)])
        uow.posts.get.return_value = post

        likes = await service.unlike_post(user_id, str(post.id))

        assert likes == [Like(user_id=other_user_id)]

    @pytest.mark.asyncio
    async def test_unlike_without_like_raises(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.posts.get.return_value = _post(user_id)

        with pytest.raises(PostNotLikedError) as exc_info:
            await service.unlike_post(user_id, str(uuid4()))

        assert exc_info.value.message == "Post has not yet been liked"

    @pytest.mark.asyncio
    async def test_like_missing_post(self, service: PostService, uow: FakeUnitOfWork, user_id: UUID):
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.like_post(user_id, str(uuid4()))


# --- comments ---


class TestComments:
    @pytest.mark.asyncio
    async def test_add_comment_prepends_with_author_snapshot(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, author: User
    ):
        earlier = Comment(user_id=uuid4(), text="first", name="Bob", avatar="https://a/2")
        post = _post(uuid4(), comments=[earlier])
        uow.users.get.return_value = author
        uow.posts.get.return_value = post

        comments = await service.add_comment(user_id, str(post.id), "second")

        assert [c.text for c in comments] == ["second", "first"]
        assert comments[0].user_id == user_id
        assert comments[0].name == author.name
        assert comments[0].avatar == author.avatar

    @pytest.mark.asyncio
    async def test_add_comment_missing_post(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, author: User
    ):
        uow.users.get.return_value = author
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.add_comment(user_id, str(uuid4()), "hi")

    @pytest.mark.asyncio
    async def test_remove_comment_by_id_keeps_callers_other_comments(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ):
        newer = Comment(user_id=user_id, text="newer", name="Alice", avatar="a")
        older = Comment(user_id=user_id, text="older", name="Alice", avatar="a")
        post = _post(uuid4(), comments=[newer, older])
        uow.posts.get.return_value = post

        comments = await service.remove_comment(user_id, str(post.id), str(older.id))

        assert [c.text for c in comments] == ["newer"]

    @pytest.mark.asyncio
    async def test_remove_unknown_comment(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.posts.get.return_value = _post(user_id)

        with pytest.raises(CommentNotFoundError) as exc_info:
            await service.remove_comment(user_id, str(uuid4()), str(uuid4()))

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Comment does not exist"

    @pytest.mark.asyncio
    async def test_remove_someone_elses_comment(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, other_user_id: UUID
    ):
        comment = Comment(user_id=other_user_id, text="theirs", name="Bob", avatar="b")
        post = _post(user_id, comments=[comment])
        uow.posts.get.return_value = post

        with pytest.raises(NotAuthorizedError):
            await service.remove_comment(user_id, str(post.id), str(comment.id))

        assert post.comments == [comment]
        uow.posts.update.assert_not_called()
