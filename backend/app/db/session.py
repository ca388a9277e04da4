"""Database session management.

This module provides async database connection and session management.
PostgreSQL (asyncpg) in production, SQLite (aiosqlite) in tests.
"""

import logging
from collections.abc import AsyncGenerator
from typing import TYPE_CHECKING, Any

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)

_engine: "AsyncEngine | None" = None
_session_factory: "async_sessionmaker[AsyncSession] | None" = None


def _get_engine(database_url: str, echo: bool = False) -> "AsyncEngine":
    """Create async engine; pool and server settings apply to PostgreSQL only."""
    if database_url.startswith("sqlite"):
        return create_async_engine(database_url, echo=echo)

    options: dict[str, Any] = {
        "pool_size": 10,
        "max_overflow": 20,
        "pool_recycle": 3600,
        "pool_pre_ping": True,
        "connect_args": {
            "command_timeout": 30,
            "server_settings": {
                "statement_timeout": "30s",
                "application_name": "model-viewer",
            },
        },
    }
    return create_async_engine(database_url, echo=echo, **options)


async def init_db(
    database_url: str, echo: bool = False, create_tables: bool = True
) -> "AsyncEngine":
    """Initialize database connection and optionally create tables.

    Args:
        database_url: Database connection URL
        echo: Enable SQL query logging
        create_tables: Create missing tables from SQLModel metadata.
                      Existing tables are left untouched.
    """
    global _engine, _session_factory

    # Register table metadata
    from app.db import models  # noqa: F401

    _engine = _get_engine(database_url, echo)
    _session_factory = async_sessionmaker(
        _engine, class_=AsyncSession, expire_on_commit=False
    )

    if create_tables:
        async with _engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    logger.info("Database initialized: %s", database_url.split("@")[-1])
    return _engine


async def close_db() -> None:
    """Close database connection."""
    global _engine, _session_factory
    if _engine:
        await _engine.dispose()
        _engine = None
        _session_factory = None
        logger.info("Database connection closed")


def get_session_factory() -> "async_sessionmaker[AsyncSession]":
    """Get the session factory for code running outside a request."""
    if _session_factory is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    return _session_factory


async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Get async database session."""
    async with get_session_factory()() as session:
        yield session
