"""User registration routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from api.v1.dependencies import get_user_service
from api.v1.schemas.common import ErrorResponse, TokenResponse
from api.v1.schemas.user import REGISTER_RULES, RegisterRequest
from api.validation import ValidatedBody
from core.rate_limit import WRITE_LIMIT, limiter
from domain.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=TokenResponse,
    summary="Register a user",
    responses={
        200: {"description": "User created; token for immediate login"},
        400: {"model": ErrorResponse, "description": "Validation failed or user already exists"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def register_user(
    request: Request,
    body: Annotated[RegisterRequest, Depends(ValidatedBody(RegisterRequest, REGISTER_RULES))],
    service: UserService = Depends(get_user_service),
) -> TokenResponse:
    """Register a user and return a token so they are logged in right away."""
    token = await service.register(body.name, body.email, body.password)
    return TokenResponse(token=token)
