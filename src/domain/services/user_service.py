"""User directory service: registration, login and current-user lookup."""

from typing import Callable
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from domain.entities.user import User, gravatar_url
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.auth.provider import IAuthProvider, IPasswordHasher, TokenUser

logger = structlog.get_logger()


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserService:
    """Service layer for user accounts and token issuance."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        auth_provider: IAuthProvider,
        password_hasher: IPasswordHasher,
    ) -> None:
        self._uow_factory = uow_factory
        self._auth_provider = auth_provider
        self._password_hasher = password_hasher

    async def register(self, name: str, email: str, password: str) -> str:
        """Create a user and return a signed token for them.

        Raises:
            DuplicateEmailError: If the email is already registered.
        """
        email = normalize_email(email)
        async with self._uow_factory() as uow:
            if await uow.users.get_by_email(email):
                raise DuplicateEmailError(email)

            user = User(
                name=name,
                email=email,
                password_hash=await self._password_hasher.hash(password),
                avatar=gravatar_url(email),
            )

            try:
                created = await uow.users.create(user)
                await uow.commit()
            except IntegrityError as exc:
                await uow.rollback()
                # A concurrent registration won the unique index on email.
                raise DuplicateEmailError(email) from exc

        logger.info("user_registered", user_id=str(created.id))
        return self._issue_token(created.id)

    async def authenticate(self, email: str, password: str) -> str:
        """Check credentials and return a signed token.

        Raises:
            InvalidCredentialsError: For an unknown email or a wrong
                password alike.
        """
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_email(normalize_email(email))

        if not user or not await self._password_hasher.verify(password, user.password_hash):
            logger.info("login_failed")
            raise InvalidCredentialsError()

        logger.info("user_logged_in", user_id=str(user.id))
        return self._issue_token(user.id)

    async def get_current_user(self, user_id: UUID) -> User:
        """Get the user behind a verified token."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))
            return user

    def _issue_token(self, user_id: UUID) -> str:
        return self._auth_provider.create_token(TokenUser(id=user_id))
