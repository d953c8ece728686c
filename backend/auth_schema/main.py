#!/usr/bin/env python3
"""
Auth Schema Bootstrap

Creates the auth_credentials and auth_sessions collections with their
partial unique indexes and the session TTL index.
Meant to run once per environment; re-running against an already
bootstrapped database changes nothing.

Usage:
    auth-schema-bootstrap
    python -m auth_schema

Environment Variables:
    MONGODB_URI: MongoDB connection string (default: mongodb://mongodb:27017)
    AUTH_DB_NAME: Target database (default: appdb)
    LOG_LEVEL: Logging level (default: INFO)
"""
import asyncio
import logging
import sys

from pydantic import ValidationError

from auth_schema.config import get_settings
from auth_schema.database.connections import close_connections, get_database, ping
from auth_schema.migrations import create_auth_collections

logger = logging.getLogger("auth_schema")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


async def main() -> None:
    """Connect, apply the auth schema, disconnect."""
    settings = get_settings()
    try:
        await ping()
        logger.info("Connected to MongoDB")

        db = await get_database(settings.auth_db_name)
        await create_auth_collections.apply(db)
    finally:
        await close_connections()
        logger.info("Disconnected")


def run() -> None:
    """Console script entry point."""
    try:
        settings = get_settings()
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)
    configure_logging(settings.log_level)

    logger.info("=" * 60)
    logger.info("Auth Schema Bootstrap")
    logger.info(f"Database: {settings.auth_db_name}")
    logger.info("=" * 60)

    try:
        asyncio.run(main())
    except Exception as e:
        logger.error(f"Schema bootstrap failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    run()
