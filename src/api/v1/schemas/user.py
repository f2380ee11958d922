"""Pydantic schemas and validation rules for users and authentication."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from api.validation import Rule, exists, is_email, min_length, not_empty

REGISTER_RULES = (
    Rule("name", "Name is required", not_empty),
    Rule("email", "Please include a valid email", is_email),
    Rule("password", "Please enter a password with 6 or more characters", min_length(6)),
)

LOGIN_RULES = (
    Rule("email", "Please include a valid email", is_email),
    Rule("password", "Password is required", exists),
)


class RegisterRequest(BaseModel):
    """Schema for registering a user."""

    name: str
    email: str
    password: str


class LoginRequest(BaseModel):
    """Schema for logging in."""

    email: str
    password: str


class UserResponse(BaseModel):
    """Schema for the authenticated user (never includes the password)."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "name": "John Doe",
                "email": "john@example.com",
                "avatar": "https://www.gravatar.com/avatar/abc?s=200&r=pg&d=mm",
                "date": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    name: str
    email: str
    avatar: str
    date: datetime
