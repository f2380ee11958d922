"""Authentication routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_user_service
from api.v1.schemas.common import ErrorResponse, TokenResponse
from api.v1.schemas.user import LOGIN_RULES, LoginRequest, UserResponse
from api.validation import ValidatedBody
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get(
    "",
    response_model=UserResponse,
    summary="Get the authenticated user",
    responses={401: {"model": ErrorResponse, "description": "Missing or invalid token"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_authenticated_user(
    request: Request,
    user: CurrentUser,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Return the user behind the x-auth-token, without the password."""
    account = await service.get_current_user(user.id)
    return UserResponse(
        id=account.id,
        name=account.name,
        email=account.email,
        avatar=account.avatar,
        date=account.created_at,
    )


@router.post(
    "",
    response_model=TokenResponse,
    summary="Log in",
    responses={400: {"model": ErrorResponse, "description": "Invalid credentials"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def login(
    request: Request,
    body: Annotated[LoginRequest, Depends(ValidatedBody(LoginRequest, LOGIN_RULES))],
    service: UserService = Depends(get_user_service),
) -> TokenResponse:
    """Authenticate with email and password and get a token."""
    token = await service.authenticate(body.email, body.password)
    return TokenResponse(token=token)
