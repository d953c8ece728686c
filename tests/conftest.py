"""
Global test fixtures for the auth schema bootstrap.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock / mongomock-motor)
- Credential and session document factories
- Settings cache isolation
"""

import sys
from datetime import datetime, timezone, timedelta
from pathlib import Path

import pytest
import pytest_asyncio

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))


# =============================================================================
# Settings Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make every test read settings from its own environment."""
    from auth_schema.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# MongoDB Fixtures (mongomock)
# =============================================================================

@pytest.fixture
def mock_mongo_client():
    """
    Create a mock MongoDB client using mongomock.

    This provides an in-memory MongoDB that behaves like the real thing
    for testing purposes.
    """
    try:
        import mongomock
        client = mongomock.MongoClient()
        yield client
        client.close()
    except ImportError:
        pytest.skip("mongomock not installed")


@pytest_asyncio.fixture
async def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.
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
    """Provide an empty mock auth database."""
    yield mock_async_mongo_client["appdb"]


# =============================================================================
# Document Fixtures
# =============================================================================

@pytest.fixture
def make_credential():
    """
    Factory for credential documents as stored in auth_credentials.

    Usage:
        doc = make_credential(username="alice", deleted_at=some_datetime)
    """
    counter = {"n": 0}

    def _make(**overrides) -> dict:
        counter["n"] += 1
        n = counter["n"]
        doc = {
            "user_id": f"user-{n}",
            "username": f"user{n}",
            "email": f"user{n}@example.com",
            "password_hash": "$2b$12$LQv3c1yqBWVHxkd0LHAkCOYz6TtxMQJqhN8/X4.qOZ3q7K9V6X6Hy",
            "created_at": datetime.now(timezone.utc),
            "deleted_at": None,
        }
        doc.update(overrides)
        return doc

    return _make


@pytest.fixture
def make_session():
    """Factory for session documents as stored in auth_sessions."""
    counter = {"n": 0}

    def _make(**overrides) -> dict:
        counter["n"] += 1
        n = counter["n"]
        now = datetime.now(timezone.utc)
        doc = {
            "user_id": "user-1",
            "token": f"session-token-{n}",
            "expires_at": now + timedelta(hours=24),
            "revoked_at": None,
            "user_agent": "pytest",
            "ip_address": "127.0.0.1",
            "created_at": now,
        }
        doc.update(overrides)
        return doc

    return _make
