"""
Create the auth collections and their indexes.

auth_credentials:
- username, email: unique among live credentials (deleted_at is null)
- user_id: lookup among live credentials

auth_sessions:
- token: unique among active sessions (revoked_at is null)
- user_id: lookup among active sessions
- expires_at: range queries, and TTL purge 30 days after expiry

MongoDB keeps one index per key pattern, so the plain expires_at index is
created first and then turned into the TTL index with collMod.
"""
import logging
from collections import Counter

from motor.motor_asyncio import AsyncIOMotorDatabase

from auth_schema.database.databases.auth_db import Collections
from auth_schema.database.indexes import (
    IndexAction,
    ensure_collection,
    ensure_index,
    missing_indexes,
)

logger = logging.getLogger(__name__)

DESCRIPTION = "Create auth_credentials and auth_sessions collections and indexes"
SUCCESS_MESSAGE = "Auth collections and indexes created successfully"


class SchemaVerificationError(RuntimeError):
    """Raised when declared indexes are still missing after applying."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Missing or incompatible indexes: {', '.join(missing)}")


async def create_collection_schema(db: AsyncIOMotorDatabase, collection_name: str) -> Counter:
    """
    Create one collection, then its indexes in declaration order.

    Returns:
        Counter of "collection_created" and IndexAction outcomes
    """
    outcomes = Counter()
    if await ensure_collection(db, collection_name):
        outcomes["collection_created"] += 1
    for index_def in Collections.INDEXES[collection_name]:
        outcomes[await ensure_index(db, collection_name, index_def)] += 1
    return outcomes


async def create_credentials_schema(db: AsyncIOMotorDatabase) -> Counter:
    return await create_collection_schema(db, Collections.CREDENTIALS)


async def create_sessions_schema(db: AsyncIOMotorDatabase) -> Counter:
    return await create_collection_schema(db, Collections.SESSIONS)


def summarize(outcomes: Counter) -> str:
    """One-line account of what a run changed."""
    return (
        f"{outcomes['collection_created']} collections created, "
        f"{outcomes[IndexAction.CREATED]} indexes created, "
        f"{outcomes[IndexAction.EXISTS]} already present, "
        f"{outcomes[IndexAction.TTL_ATTACHED]} TTL attached"
    )


async def verify_schema(db: AsyncIOMotorDatabase) -> list[str]:
    """Return the declared indexes that are missing or incompatible."""
    missing = []
    for collection_name, index_defs in Collections.INDEXES.items():
        missing.extend(await missing_indexes(db, collection_name, index_defs))
    return missing


async def apply(db: AsyncIOMotorDatabase) -> None:
    """
    Apply the auth schema and print a confirmation.

    Any driver error aborts the remaining steps and propagates unchanged.

    Raises:
        SchemaVerificationError: If an index is missing after applying
    """
    logger.info(f"Applying: {DESCRIPTION}")
    outcomes = await create_credentials_schema(db)
    outcomes += await create_sessions_schema(db)

    missing = await verify_schema(db)
    if missing:
        raise SchemaVerificationError(missing)
    logger.info("Schema verified: all declared indexes present")
    logger.info(f"Schema summary: {summarize(outcomes)}")

    print(SUCCESS_MESSAGE)
