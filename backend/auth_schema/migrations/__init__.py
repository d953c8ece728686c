"""
Schema migrations for the auth database.
"""
from auth_schema.migrations import create_auth_collections

__all__ = ["create_auth_collections"]
