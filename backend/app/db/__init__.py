"""Database module for model-viewer.

This module provides database connection, models, and utilities.

Note: Password utilities (hash_password, verify_password) are in app.core.security
"""

from app.db.models import Annotation, Component, User
from app.db.session import (
    close_db,
    get_async_session,
    get_session_factory,
    init_db,
)

__all__ = [
    "Annotation",
    "Component",
    "User",
    "close_db",
    "get_async_session",
    "get_session_factory",
    "init_db",
]
