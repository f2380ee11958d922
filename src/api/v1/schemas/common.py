"""Common Pydantic schemas shared across the API."""

from typing import Any

from pydantic import BaseModel


class ValidationErrorItem(BaseModel):
    """One failed field check."""

    msg: str
    param: str | None = None
    location: str | None = None


class ErrorResponse(BaseModel):
    """Standardized error response."""

    error_code: str
    msg: str
    details: Any | None = None
    errors: list[ValidationErrorItem] | None = None


class MessageResponse(BaseModel):
    """Simple message response."""

    msg: str


class TokenResponse(BaseModel):
    """Signed token returned on registration and login."""

    token: str
