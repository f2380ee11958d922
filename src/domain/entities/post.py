"""Post domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass(frozen=True, slots=True)
class Like:
    """A user's like on a post."""

    user_id: UUID


@dataclass
class Comment:
    """A comment on a post.

    ``name`` and ``avatar`` are copied from the author when the comment is
    written and are not updated afterwards.
    """

    user_id: UUID
    text: str
    name: str
    avatar: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Post:
    """Domain entity for a feed post.

    ``name`` and ``avatar`` are a snapshot of the author at creation time.
    Likes and comments are kept newest first.
    """

    user_id: UUID
    text: str
    name: str
    avatar: str
    id: UUID = field(default_factory=uuid4)
    likes: list[Like] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)
    version: int = 1

    def is_liked_by(self, user_id: UUID) -> bool:
        return any(like.user_id == user_id for like in self.likes)

    def add_like(self, user_id: UUID) -> None:
        self.likes.insert(0, Like(user_id=user_id))

    def remove_like(self, user_id: UUID) -> None:
        self.likes = [like for like in self.likes if like.user_id != user_id]

    def add_comment(self, comment: Comment) -> None:
        self.comments.insert(0, comment)

    def find_comment(self, comment_id: UUID) -> Comment | None:
        return next((c for c in self.comments if c.id == comment_id), None)

    def remove_comment(self, comment_id: UUID) -> None:
        self.comments = [c for c in self.comments if c.id != comment_id]
