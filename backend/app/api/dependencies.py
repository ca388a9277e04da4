"""API dependencies for model-viewer.

Contains the token guard and shared service singletons.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.errors import UnauthorizedError
from app.core.logging import set_request_user
from app.db import get_async_session
from app.schemas.auth import TokenIdentity
from app.services.auth_service import AuthService
from app.services.converter import FormatConverter
from app.services.model_service import ModelService
from app.storage import LocalDirModelStore, ModelStore

_bearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
) -> TokenIdentity:
    """Resolve the caller from the ``Authorization: Bearer`` header.

    Raises:
        UnauthorizedError: If the header is missing or the token is invalid/expired
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("No token")
    identity = AuthService.verify_token(credentials.credentials)
    set_request_user(identity.username)
    return identity


@lru_cache
def get_model_store() -> ModelStore:
    """Get model store singleton based on config."""
    settings = get_settings()
    return LocalDirModelStore(
        upload_dir=settings.storage.upload_dir,
        models_dir=settings.storage.models_dir,
        url_prefix=settings.storage.models_url_prefix,
    )


@lru_cache
def get_format_converter() -> FormatConverter:
    """Get format converter singleton."""
    return FormatConverter()


def get_model_service(
    store: Annotated[ModelStore, Depends(get_model_store)],
    converter: Annotated[FormatConverter, Depends(get_format_converter)],
) -> ModelService:
    return ModelService(store=store, converter=converter)


CurrentUser = Annotated[TokenIdentity, Depends(get_current_user)]
DbSession = Annotated[AsyncSession, Depends(get_async_session)]
Models = Annotated[ModelService, Depends(get_model_service)]
