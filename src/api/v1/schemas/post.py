"""Pydantic schemas and validation rules for posts."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from api.validation import Rule, not_empty

TEXT_RULES = (Rule("text", "Text is required", not_empty),)


class PostCreate(BaseModel):
    """Schema for creating a post."""

    text: str


class CommentCreate(BaseModel):
    """Schema for commenting on a post."""

    text: str


class LikeResponse(BaseModel):
    """Schema for a like entry."""

    user: UUID


class CommentResponse(BaseModel):
    """Schema for a comment entry."""

    id: UUID
    user: UUID
    text: str
    name: str
    avatar: str
    date: datetime


class PostResponse(BaseModel):
    """Schema for a post document."""

    id: UUID
    user: UUID
    text: str
    name: str
    avatar: str
    likes: list[LikeResponse] = Field(default_factory=list)
    comments: list[CommentResponse] = Field(default_factory=list)
    date: datetime
