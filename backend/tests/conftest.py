"""Shared test fixtures for model-viewer tests."""

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel

from app.api.dependencies import get_format_converter, get_model_store
from app.core.config import get_settings
from app.core.security import hash_password
from app.db import User, init_db
from app.db.session import close_db, get_async_session
from app.main import create_app

TEST_USERNAME = "admin"
TEST_PASSWORD = "admin"


@pytest.fixture(autouse=True)
def setup_test_env(tmp_path, monkeypatch):
    """Point storage and database at a temporary directory."""
    for name in ("DATABASE_URL", "JWT_SECRET", "PORT"):
        monkeypatch.delenv(name, raising=False)

    monkeypatch.setenv("MODELVIEWER_STORAGE__UPLOAD_DIR", str(tmp_path / "uploads"))
    monkeypatch.setenv("MODELVIEWER_STORAGE__MODELS_DIR", str(tmp_path / "models"))
    monkeypatch.setenv(
        "MODELVIEWER_DATABASE__URL", f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"
    )
    monkeypatch.setenv("MODELVIEWER_AUTH__JWT_SECRET", "test-secret")
    monkeypatch.setenv("MODELVIEWER_LOGGING__JSON_FORMAT", "false")

    # Clear caches to pick up new env vars
    get_settings.cache_clear()
    get_model_store.cache_clear()
    get_format_converter.cache_clear()

    yield

    get_settings.cache_clear()
    get_model_store.cache_clear()
    get_format_converter.cache_clear()


@pytest_asyncio.fixture
async def db_engine():
    """Create a database engine on a fresh SQLite file."""
    engine = await init_db(get_settings().database.url, echo=False, create_tables=False)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine
    await close_db()


@pytest_asyncio.fixture
async def db_session(db_engine):
    """Create a database session for testing."""
    async_session = sessionmaker(
        db_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with async_session() as session:
        yield session


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create a test user."""
    user = User(
        username=TEST_USERNAME,
        password_hash=hash_password(TEST_PASSWORD),
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
def app(db_engine) -> FastAPI:
    """Application wired to the test database."""
    application = create_app()

    async def override_get_async_session():
        async_session = sessionmaker(
            db_engine, class_=AsyncSession, expire_on_commit=False
        )
        async with async_session() as session:
            yield session

    application.dependency_overrides[get_async_session] = override_get_async_session
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def unauthenticated_client(app, test_user) -> AsyncClient:
    """Create an async test client without a bearer token.

    Note: test_user is required so login tests have an account to hit.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def async_client(app, test_user) -> AsyncClient:
    """Create an async test client carrying a valid bearer token."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post(
            "/api/login",
            json={"username": TEST_USERNAME, "password": TEST_PASSWORD},
        )
        assert response.status_code == 200, f"Login failed: {response.text}"

        client.headers["Authorization"] = f"Bearer {response.json()['token']}"
        yield client
