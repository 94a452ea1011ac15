"""
Stormtrooper Test Fixtures
==========================

Pytest fixtures for the Stormtrooper backend: an in-memory database,
the FastAPI application with an async HTTP client, and authentication.

Example:
    async def test_register(async_client):
        response = await async_client.post("/api/v1/users", json={})
        assert response.status_code == 201
"""

import os
from typing import AsyncGenerator, Callable

# Set testing environment variables before any application imports
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DATABASE_CREATE_TABLES", "false")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-testing-only")
os.environ.setdefault("ACCESS_TOKEN_KEY", "6b" * 32)

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from stormtrooper.auth.jwt import create_access_token
from stormtrooper.db.session import (
    create_engine_from_url,
    create_session_factory,
    get_db,
    init_models,
)
from stormtrooper.main import create_application
from stormtrooper.models import User
from stormtrooper.services import accounts

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    Create a fresh in-memory database with the full schema for each test.
    """
    engine = create_engine_from_url(TEST_DATABASE_URL)
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    """
    Provide a session factory bound to the test database.

    Useful for checking state after requests in a fresh session.
    """
    return create_session_factory(async_engine)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a database session for service level tests.
    """
    async with session_factory() as session:
        yield session


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================

@pytest.fixture
def app(session_factory) -> FastAPI:
    """
    Create the FastAPI application wired to the test database.
    """
    test_app = create_application()

    async def override_get_db():
        async with session_factory() as session:
            yield session

    test_app.dependency_overrides[get_db] = override_get_db
    yield test_app
    test_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    """
    Provide an async HTTP client for testing API endpoints.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers={"Content-Type": "application/json"},
    ) as client:
        yield client


# =============================================================================
# Authentication Fixtures
# =============================================================================

@pytest.fixture
def auth_headers() -> Callable[[str], dict]:
    """
    Provide a function building Authorization headers for a user id.
    """
    def _headers(user_id: str) -> dict:
        return {"Authorization": f"Bearer {create_access_token(subject=user_id)}"}

    return _headers


@pytest_asyncio.fixture
async def test_user(db_session) -> User:
    """
    Provide a registered anonymous user with a device token.
    """
    return await accounts.register_user(db_session, device_token="A1B2C3D4E5F6")


@pytest.fixture
def capture_logs(caplog):
    """
    Capture log messages during tests.
    """
    import logging
    caplog.set_level(logging.DEBUG)
    return caplog
