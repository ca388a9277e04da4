"""Authentication schemas."""

from pydantic import BaseModel


class LoginRequest(BaseModel):
    """Request schema for login."""

    username: str
    password: str


class TokenResponse(BaseModel):
    """Response schema for a successful login."""

    token: str


class TokenIdentity(BaseModel):
    """Caller identity decoded from a bearer token."""

    user_id: int
    username: str
