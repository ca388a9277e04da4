"""Authentication service for model-viewer.

Provides:
- authenticate: Check username/password against the users table
- issue_token: Sign a time-limited bearer token for a user
- verify_token: Decode a bearer token into the caller's identity

Tokens are not stored anywhere. A token stays valid until it expires;
there is no way to revoke it earlier.
"""

import logging

import jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import UnauthorizedError
from app.core.security import create_access_token, decode_access_token, verify_password
from app.db import User
from app.schemas.auth import TokenIdentity

logger = logging.getLogger(__name__)


class AuthService:
    """Stateless credential and token handling."""

    @staticmethod
    async def authenticate(db: AsyncSession, username: str, password: str) -> User:
        """Return the user matching the credentials.

        Raises:
            UnauthorizedError: If the user does not exist or the password is wrong
        """
        result = await db.execute(
            select(User).where(User.username == username)  # type: ignore[arg-type]
        )
        user = result.scalar_one_or_none()

        if user is None:
            logger.info("Login rejected: unknown user", extra={"username": username})
            raise UnauthorizedError("Invalid username or password")

        if not verify_password(password, user.password_hash):
            logger.info("Login rejected: bad password", extra={"username": username})
            raise UnauthorizedError("Invalid username or password")

        return user

    @staticmethod
    def issue_token(user: User) -> str:
        """Sign a bearer token embedding the user id and username."""
        return create_access_token(str(user.id), {"username": user.username})

    @staticmethod
    def verify_token(token: str) -> TokenIdentity:
        """Decode a bearer token.

        Raises:
            UnauthorizedError: If the token is expired, malformed or forged
        """
        try:
            claims = decode_access_token(token)
        except jwt.ExpiredSignatureError:
            raise UnauthorizedError("Token expired") from None
        except jwt.InvalidTokenError:
            raise UnauthorizedError("Invalid token") from None

        try:
            return TokenIdentity(
                user_id=int(claims["sub"]), username=claims["username"]
            )
        except (KeyError, TypeError, ValueError):
            raise UnauthorizedError("Invalid token") from None
