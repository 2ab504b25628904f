"""
Global test fixtures for the credential auth backend.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock-motor)
- Test settings with a fast bcrypt work factor
- Test user data
- FastAPI test clients
"""

import sys
from pathlib import Path
from typing import Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))


TEST_DATABASE_URL = "mongodb://localhost:27017/auth_test"


# =============================================================================
# Settings Fixtures
# =============================================================================

@pytest.fixture
def test_settings():
    """Settings pointing at a test database, with the cheapest bcrypt cost."""
    from app.config import Settings

    return Settings(
        database_url=TEST_DATABASE_URL,
        bcrypt_rounds=4,
        db_timeout_seconds=1.0,
    )


@pytest.fixture
def unconfigured_settings():
    """Settings with no DATABASE_URL."""
    from app.config import Settings

    return Settings(database_url=None, bcrypt_rounds=4)


# =============================================================================
# MongoDB Fixtures (mongomock)
# =============================================================================

@pytest_asyncio.fixture
async def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.

    This provides an in-memory MongoDB that behaves like the real thing
    for testing purposes.
    """
    try:
        from mongomock_motor import AsyncMongoMockClient
        client = AsyncMongoMockClient()
        yield client
        client.close()
    except ImportError:
        pytest.skip("mongomock-motor not installed")


@pytest_asyncio.fixture
async def mock_auth_db(mock_async_mongo_client):
    """Provide mock auth database with the same indexes as the real app."""
    from app.database.indexes import create_indexes

    db = mock_async_mongo_client["auth_test"]
    await create_indexes(db)
    yield db


# =============================================================================
# User Fixtures
# =============================================================================

@pytest.fixture
def test_user_data() -> dict:
    """Basic test user data for registration and login."""
    return {
        "email": "testuser@example.com",
        "password": "SecurePassword123!"
    }


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================

@pytest.fixture
def app():
    """
    Create FastAPI app for testing.

    Note: This imports the actual app and should be used with the
    connection provider overridden.
    """
    from app.main import app
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> Generator:
    """
    Create a TestClient for the FastAPI app.

    The lifespan is not run, so no real MongoDB connection is attempted.
    """
    yield TestClient(app)


@pytest_asyncio.fixture
async def async_client(app):
    """
    Create an async test client.

    Use this for testing async endpoints.
    """
    from httpx import AsyncClient, ASGITransport

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac
