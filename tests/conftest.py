"""Pytest configuration and shared fixtures.

Organization:
    - Environment: settings that keep tests off external infrastructure
    - Database Fixtures: in-memory SQLite engine, session factory, store
    - Application Fixtures: FastAPI app with overridden dependencies and client
    - Authentication Fixtures: callers and bearer headers
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator
from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncEngine

    from travel_service.features.site_settings.store import ConfigStore

# Ensure tests run without external infrastructure
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("APP_ROOT_PATH", "")
os.environ.setdefault("DB_ENABLED", "false")
os.environ.setdefault("DB_SQLITE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FILE_ENABLED", "false")
os.environ.setdefault("LOG_JSON", "false")

ADMIN_TOKEN = "test-admin-token"
USER_TOKEN = "test-user-token"


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory SQLite database with all tables created.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    from travel_service.core.database.base import Base
    from travel_service.features.site_settings import models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest.fixture
def store(session_factory: async_sessionmaker[AsyncSession]) -> ConfigStore:
    from travel_service.features.site_settings.store import ConfigStore

    return ConfigStore(session_factory)


# ============================================================================
# Authentication Fixtures
# ============================================================================


@pytest.fixture
def admin_caller():
    from travel_service.core.schemas.auth import CallerIdentity

    return CallerIdentity(user_id="admin-1", roles=["admin"])


@pytest.fixture
def user_caller():
    from travel_service.core.schemas.auth import CallerIdentity

    return CallerIdentity(user_id="user-1", roles=["user"])


@pytest.fixture
def anonymous_caller():
    from travel_service.core.schemas.auth import CallerIdentity

    return CallerIdentity.anonymous()


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def user_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {USER_TOKEN}"}


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def app(store: ConfigStore) -> FastAPI:
    """FastAPI application wired to the in-memory store and test tokens.

    ASGITransport does not run the lifespan, so the store and auth settings
    are supplied through dependency overrides.
    """
    from travel_service.app.main import create_app
    from travel_service.core.settings import get_auth_settings
    from travel_service.core.settings.auth import AuthSettings
    from travel_service.features.site_settings.dependencies import get_config_store

    application = create_app()
    auth_settings = AuthSettings(admin_tokens=[ADMIN_TOKEN], user_tokens=[USER_TOKEN])
    application.dependency_overrides[get_config_store] = lambda: store
    application.dependency_overrides[get_auth_settings] = lambda: auth_settings
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client bound to the test application."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
