"""JWT authentication provider implementation.

Tokens are HS256-signed and carry the user id nested under ``user``:
    {
        "user": { "id": "user-uuid" },
        "exp": 1234567890
    }
"""

from datetime import datetime, timedelta
from typing import Any, Optional
from uuid import UUID

import structlog
from jose import JWTError, jwt

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = structlog.get_logger()


class JWTAuthProvider:
    """JWT-based authentication provider for x-auth-token headers."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_seconds: int = settings.jwt_expire_seconds,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_seconds = expire_seconds

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a JWT and extract the user id.

        Args:
            token: The JWT to validate

        Returns:
            TokenUser if valid, None if the signature, expiry or payload
            shape is wrong
        """
        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
            )
        except JWTError as exc:
            logger.debug("token_rejected", error=str(exc))
            return None

        user_claim = payload.get("user")
        if not isinstance(user_claim, dict):
            return None

        user_id = user_claim.get("id")
        if not user_id:
            return None

        try:
            return TokenUser(id=UUID(str(user_id)))
        except ValueError:
            return None

    def create_token(self, user: TokenUser) -> str:
        """
        Create a signed JWT for a user.

        Args:
            user: The user to create a token for

        Returns:
            The generated JWT string
        """
        expire = datetime.utcnow() + timedelta(seconds=self._expire_seconds)

        payload: dict = {
            "user": {"id": str(user.id)},
            "exp": expire,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
