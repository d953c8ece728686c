"""
Integration test fixtures.

These tests require a running MongoDB (5.1+ for collMod TTL conversion).
Mark with @pytest.mark.integration to skip in normal test runs.
"""
import os
import uuid

import pytest
import pytest_asyncio
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError


@pytest.fixture
def live_mongo_uri():
    """Connection string of the MongoDB used for integration tests."""
    return os.getenv("MONGODB_TEST_URI", "mongodb://localhost:27017")


@pytest_asyncio.fixture
async def live_client(live_mongo_uri):
    """Motor client against the live server; skips if it is unreachable."""
    client = AsyncIOMotorClient(live_mongo_uri, serverSelectionTimeoutMS=2000)
    try:
        await client.admin.command("ping")
    except PyMongoError:
        client.close()
        pytest.skip(f"No MongoDB reachable at {live_mongo_uri}")
    yield client
    client.close()


@pytest_asyncio.fixture
async def live_db(live_client):
    """Throwaway database, dropped after the test."""
    name = f"auth_schema_test_{uuid.uuid4().hex[:12]}"
    yield live_client[name]
    await live_client.drop_database(name)
