"""
Idempotent collection and index creation.

Each helper checks what already exists before issuing a create, so running
the bootstrap against a database that already carries the schema is a no-op.
An existing index whose options conflict with the declaration is never
modified: the create is issued anyway and the server's OperationFailure
propagates to the caller.
"""
import logging
from enum import Enum
from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase

logger = logging.getLogger(__name__)


class IndexAction(str, Enum):
    """Outcome of an ensure_index call."""
    CREATED = "created"
    EXISTS = "exists"
    TTL_ATTACHED = "ttl_attached"


def index_name(keys: list[tuple[str, Any]]) -> str:
    """Default server-side index name, e.g. [("email", 1)] -> "email_1"."""
    return "_".join(f"{field}_{direction}" for field, direction in keys)


def describe(collection_name: str, index_def: dict) -> str:
    """Human readable index description for log lines."""
    fields = ", ".join(field for field, _ in index_def["keys"])
    extras = []
    if index_def.get("unique"):
        extras.append("unique")
    if index_def.get("partialFilterExpression"):
        extras.append(f"partial {index_def['partialFilterExpression']}")
    if index_def.get("expireAfterSeconds") is not None:
        extras.append(f"ttl {index_def['expireAfterSeconds']}s")
    suffix = f" {' '.join(extras)}" if extras else ""
    return f"{collection_name}({fields}){suffix}"


def _key_pattern(info: dict) -> list[tuple[str, Any]]:
    key = info["key"]
    if isinstance(key, dict):
        key = key.items()
    return [(field, direction) for field, direction in key]


def index_matches(info: dict, index_def: dict) -> bool:
    """
    True when an existing index has the same uniqueness and partial filter
    as the declaration. TTL is compared separately by the caller.
    """
    return (
        bool(info.get("unique", False)) == bool(index_def.get("unique", False))
        and info.get("partialFilterExpression") == index_def.get("partialFilterExpression")
    )


async def find_index(
    collection: AsyncIOMotorCollection,
    keys: list[tuple[str, Any]],
) -> Optional[tuple[str, dict]]:
    """Find an existing index on exactly this key pattern."""
    indexes = await collection.index_information()
    for name, info in indexes.items():
        if _key_pattern(info) == list(keys):
            return name, info
    return None


async def ensure_collection(db: AsyncIOMotorDatabase, name: str) -> bool:
    """
    Create a collection unless it already exists.

    Returns:
        True if the collection was created
    """
    existing = await db.list_collection_names()
    if name in existing:
        logger.info(f"Collection {name} already exists")
        return False

    await db.create_collection(name)
    logger.info(f"Created collection: {name}")
    return True


async def set_index_ttl(
    db: AsyncIOMotorDatabase,
    collection_name: str,
    name: str,
    expire_after_seconds: int,
) -> None:
    """Turn an existing single-field index into a TTL index (MongoDB 5.1+)."""
    await db.command({
        "collMod": collection_name,
        "index": {"name": name, "expireAfterSeconds": expire_after_seconds},
    })


async def ensure_index(
    db: AsyncIOMotorDatabase,
    collection_name: str,
    index_def: dict,
) -> IndexAction:
    """
    Ensure an index described by an index definition exists.

    Args:
        db: Target database
        collection_name: Collection the index belongs to
        index_def: {"keys": [(field, direction), ...], **create_index options}

    Returns:
        What was done to satisfy the definition

    Raises:
        pymongo.errors.OperationFailure: If an index on the same keys exists
            with conflicting options
    """
    collection = db[collection_name]
    keys = index_def["keys"]
    options = {k: v for k, v in index_def.items() if k != "keys"}
    ttl = options.get("expireAfterSeconds")

    existing = await find_index(collection, keys)
    if existing is not None:
        name, info = existing
        if index_matches(info, index_def):
            # A TTL index also serves plain range queries on the same key
            if ttl is None or info.get("expireAfterSeconds") == ttl:
                logger.info(f"Index already exists: {describe(collection_name, index_def)}")
                return IndexAction.EXISTS
            if info.get("expireAfterSeconds") is None:
                await set_index_ttl(db, collection_name, name, ttl)
                logger.info(f"Attached TTL to index {name}: {describe(collection_name, index_def)}")
                return IndexAction.TTL_ATTACHED
        logger.warning(f"Index {name} on {collection_name} has conflicting options: {info}")

    await collection.create_index(keys, **options)
    logger.info(f"Created index: {describe(collection_name, index_def)}")
    return IndexAction.CREATED


async def missing_indexes(
    db: AsyncIOMotorDatabase,
    collection_name: str,
    index_defs: list[dict],
) -> list[str]:
    """
    Compare declared indexes against the collection.

    Returns:
        "<collection>.<index name>" for every declaration that has no
        compatible index (TTL included)
    """
    indexes = await db[collection_name].index_information()
    missing = []
    for index_def in index_defs:
        ttl = index_def.get("expireAfterSeconds")
        found = any(
            _key_pattern(info) == list(index_def["keys"])
            and index_matches(info, index_def)
            and (ttl is None or info.get("expireAfterSeconds") == ttl)
            for info in indexes.values()
        )
        if not found:
            missing.append(f"{collection_name}.{index_name(index_def['keys'])}")
    return missing
