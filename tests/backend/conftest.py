"""
Backend-specific test fixtures and configuration.

These fixtures extend the global fixtures with an in-memory connection
provider and dependency overrides for the FastAPI routes.
"""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "backend"))


# =============================================================================
# Connection Provider Fixtures
# =============================================================================

class InMemoryProvider:
    """Stands in for ConnectionProvider with a prebuilt handle."""

    def __init__(self, client, db):
        from app.database.connections import ConnectionHandle

        self.handle = ConnectionHandle(client=client, db=db)
        self.acquire_calls = 0

    async def acquire(self):
        self.acquire_calls += 1
        return self.handle

    async def close(self):
        pass


class UsersOnly:
    """Minimal database object exposing just the users collection."""

    def __init__(self, users):
        self.users = users

    def __getitem__(self, name):
        assert name == "users"
        return self.users


@pytest.fixture
def make_provider():
    """
    Build an InMemoryProvider around a users collection double.

    Usage:
        provider = make_provider(users_collection_mock)
    """
    def _make(users, client=None):
        return InMemoryProvider(client or MagicMock(), UsersOnly(users))
    return _make


@pytest_asyncio.fixture
async def in_memory_provider(mock_async_mongo_client, mock_auth_db):
    """Provider backed by the mongomock auth database."""
    return InMemoryProvider(mock_async_mongo_client, mock_auth_db)


@pytest.fixture
def users_collection_mock():
    """A users collection whose methods are all AsyncMock."""
    collection = MagicMock()
    collection.find_one = AsyncMock(return_value=None)
    collection.insert_one = AsyncMock()
    return collection


# =============================================================================
# Auth Service Fixtures
# =============================================================================

@pytest.fixture
def hasher(test_settings):
    """Credential hasher with the test work factor."""
    from app.core.security import CredentialHasher
    return CredentialHasher(test_settings.bcrypt_rounds)


@pytest_asyncio.fixture
async def auth_service(in_memory_provider, test_settings, hasher):
    """AuthService over the in-memory database."""
    from app.services.auth_service import AuthService
    return AuthService(in_memory_provider, test_settings, hasher)


# =============================================================================
# App Override Helpers
# =============================================================================

@pytest.fixture
def override_dependencies(app):
    """
    Point the app's settings and connection provider at test doubles.

    Usage:
        def test_something(override_dependencies, ...):
            override_dependencies(test_settings, provider)
    """
    from app.config import get_settings
    from app.database.connections import get_connection_provider

    def _override(settings, provider):
        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_connection_provider] = lambda: provider

    yield _override
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def api_client(async_client, override_dependencies, test_settings, in_memory_provider):
    """Async client whose routes use the mongomock database."""
    override_dependencies(test_settings, in_memory_provider)
    yield async_client


# =============================================================================
# Response Assertion Helpers
# =============================================================================

@pytest.fixture
def assert_error_response():
    """Helper to assert error response structure."""
    def _assert(response, status_code: int, message: str = None):
        assert response.status_code == status_code
        data = response.json()
        assert "message" in data
        assert "detail" not in data
        if message:
            assert data["message"] == message
    return _assert
