"""
Database module - MongoDB connection, auth database definitions and index helpers.
"""
from auth_schema.database.connections import (
    get_mongo_client,
    close_connections,
    get_database,
    ping,
)
from auth_schema.database.databases import auth_db

__all__ = [
    "get_mongo_client",
    "close_connections",
    "get_database",
    "ping",
    "auth_db",
]
