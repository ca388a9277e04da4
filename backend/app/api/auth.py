"""Authentication API endpoints.

Endpoints:
- POST /api/login - Exchange username/password for a bearer token
"""

from fastapi import APIRouter

from app.api.dependencies import DbSession
from app.schemas.auth import LoginRequest, TokenResponse
from app.services.auth_service import AuthService

router = APIRouter(tags=["auth"])


@router.post("/login")
async def login(body: LoginRequest, db: DbSession) -> TokenResponse:
    """Login with username and password.

    On success, returns a signed bearer token.
    On failure, returns 401 Unauthorized.
    """
    user = await AuthService.authenticate(db, body.username, body.password)
    return TokenResponse(token=AuthService.issue_token(user))
