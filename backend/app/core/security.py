"""Security utilities for model-viewer.

Password hashing uses bcrypt, matching the hashes stored in the users table.
Access tokens are stateless HS256 JWTs: they carry the user id and username
and are only invalidated by their expiry.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.config import get_settings


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its bcrypt hash.

    Malformed hashes are treated as a mismatch.
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(
    subject: str,
    claims: dict[str, Any] | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Issue a signed access token.

    Args:
        subject: Value of the ``sub`` claim (the user id)
        claims: Extra claims to embed
        expires_delta: Lifetime; defaults to the configured token TTL

    Returns:
        Encoded JWT
    """
    settings = get_settings()
    if expires_delta is None:
        expires_delta = timedelta(seconds=settings.auth.token_ttl_seconds())

    now = datetime.now(UTC)
    payload: dict[str, Any] = dict(claims or {})
    payload.update({"sub": subject, "iat": now, "exp": now + expires_delta})
    return jwt.encode(
        payload, settings.auth.jwt_secret, algorithm=settings.auth.jwt_algorithm
    )


def decode_access_token(token: str) -> dict[str, Any]:
    """Verify signature and expiry of an access token and return its claims.

    Raises:
        jwt.ExpiredSignatureError: If the token has expired
        jwt.InvalidTokenError: If the token is malformed or the signature is bad
    """
    settings = get_settings()
    return jwt.decode(
        token,
        settings.auth.jwt_secret,
        algorithms=[settings.auth.jwt_algorithm],
        options={"require": ["exp", "sub"]},
    )
