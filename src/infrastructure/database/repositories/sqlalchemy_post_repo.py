"""SQLAlchemy implementation of Post repository."""

from typing import Any
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import ConcurrentModificationError
from domain.entities.post import Comment, Like, Post
from infrastructure.database.models import PostModel
from infrastructure.database.repositories._serialization import (
    dump_datetime,
    dump_uuid,
    load_datetime,
    load_uuid,
)


class SQLAlchemyPostRepository:
    """SQLAlchemy implementation of IPostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Post | None:
        """Get a post by ID."""
        stmt = select(PostModel).where(PostModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Post]:
        """Get all posts, newest first."""
        stmt = select(PostModel).order_by(PostModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, post: Post) -> Post:
        """Create a new post."""
        model = self._to_model(post)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, post: Post) -> Post:
        """Compare-and-swap likes and comments on the post version."""
        stmt = (
            update(PostModel)
            .where(PostModel.id == post.id, PostModel.version == post.version)
            .values(
                likes=[self._dump_like(like) for like in post.likes],
                comments=[self._dump_comment(c) for c in post.comments],
                version=post.version + 1,
            )
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise ConcurrentModificationError("Post", str(post.id))

        await self._session.flush()
        post.version += 1
        return post

    async def delete(self, id: UUID) -> bool:
        """Delete a post."""
        stmt = delete(PostModel).where(PostModel.id == id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    async def delete_all_for_user(self, user_id: UUID) -> int:
        """Delete every post written by a user."""
        stmt = delete(PostModel).where(PostModel.user_id == user_id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return int(result.rowcount or 0)

    def _to_entity(self, model: PostModel) -> Post:
        """Convert ORM model to domain entity."""
        return Post(
            id=model.id,
            user_id=model.user_id,
            text=model.text,
            name=model.name,
            avatar=model.avatar,
            likes=[self._load_like(like) for like in model.likes or []],
            comments=[self._load_comment(c) for c in model.comments or []],
            created_at=model.created_at,
            version=model.version,
        )

    def _to_model(self, entity: Post) -> PostModel:
        """Convert domain entity to ORM model."""
        return PostModel(
            id=entity.id,
            user_id=entity.user_id,
            text=entity.text,
            name=entity.name,
            avatar=entity.avatar,
            likes=[self._dump_like(like) for like in entity.likes],
            comments=[self._dump_comment(c) for c in entity.comments],
            created_at=entity.created_at,
            version=entity.version,
        )

    @staticmethod
    def _dump_like(like: Like) -> dict[str, Any]:
        return {"user": dump_uuid(like.user_id)}

    @staticmethod
    def _load_like(data: dict[str, Any]) -> Like:
        return Like(user_id=load_uuid(data["user"]))

    @staticmethod
    def _dump_comment(comment: Comment) -> dict[str, Any]:
        return {
            "id": dump_uuid(comment.id),
            "user": dump_uuid(comment.user_id),
            "text": comment.text,
            "name": comment.name,
            "avatar": comment.avatar,
            "date": dump_datetime(comment.created_at),
        }

    @staticmethod
    def _load_comment(data: dict[str, Any]) -> Comment:
        return Comment(
            id=load_uuid(data["id"]),
            user_id=load_uuid(data["user"]),
            text=data["text"],
            name=data["name"],
            avatar=data["avatar"],
            created_at=load_datetime(data["date"]),  # type: ignore[arg-type]
        )
