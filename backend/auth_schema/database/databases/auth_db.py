"""
Auth database configuration.
Stores login credentials and sessions owned by the authentication service.

Structure:
- auth_credentials: username/email/password credentials, soft-deleted via deleted_at
- auth_sessions: login sessions, revoked via revoked_at, purged by TTL
"""

# Sessions are purged this long after their expires_at value (30 days)
SESSION_TTL_SECONDS = 2592000

LIVE_CREDENTIAL = {"deleted_at": None}
ACTIVE_SESSION = {"revoked_at": None}


class Collections:
    """Collection names in the auth database."""
    CREDENTIALS = "auth_credentials"
    SESSIONS = "auth_sessions"

    # Index definitions for each collection, applied in order
    INDEXES = {
        "auth_credentials": [
            {"keys": [("username", 1)], "unique": True, "partialFilterExpression": LIVE_CREDENTIAL},
            {"keys": [("email", 1)], "unique": True, "partialFilterExpression": LIVE_CREDENTIAL},
            {"keys": [("user_id", 1)], "partialFilterExpression": LIVE_CREDENTIAL},
        ],
        "auth_sessions": [
            {"keys": [("token", 1)], "unique": True, "partialFilterExpression": ACTIVE_SESSION},
            {"keys": [("user_id", 1)], "partialFilterExpression": ACTIVE_SESSION},
            {"keys": [("expires_at", 1)]},  # Range/sort queries
            {"keys": [("expires_at", 1)], "expireAfterSeconds": SESSION_TTL_SECONDS},
        ],
    }
