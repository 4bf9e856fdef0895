"""
SocialAPI Backend: Database Client Management
=============================================

What:  Process-wide Motor client, FastAPI dependency, and index bootstrap.
How:   One AsyncIOMotorClient is created at import; route handlers receive the
       database handle through `get_database`; unique indexes are created at
       startup and the client is closed at shutdown.
Who:   Used by route handlers via FastAPI's dependency injection system and by
       the lifespan handler in main.py.

Connection Model:
    The Motor client owns a connection pool and connects lazily on the first
    operation, so creating it at import time does no network I/O.
    Every request shares the same client; there is no per-request session.

Atomicity:
    Multi-step operations (cascade delete, reference scrub) are issued as
    separate writes. Transactions would need a replica set, which the default
    single-node deployment does not provide.
"""

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from socialapi.config import settings
from socialapi.models.thought import THOUGHT_INDEXES, THOUGHTS_COLLECTION
from socialapi.models.user import USER_INDEXES, USERS_COLLECTION

logger = logging.getLogger(__name__)


# ── Client Configuration ──────────────────────────────────────────────────
# tz_aware=True: datetimes come back as aware UTC values, which the schema
# layer formats without guessing the zone.
client = AsyncIOMotorClient(
    settings.mongodb_url,
    serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
    tz_aware=True,
)


# ── Database Dependency ───────────────────────────────────────────────────
async def get_database() -> AsyncIOMotorDatabase:
    """
    FastAPI dependency that provides the application database handle.

    Example usage in a route:
        @router.get("/users")
        async def list_users(db: AsyncIOMotorDatabase = Depends(get_database)):
            return await user_service.list_users(db)

    Tests replace this dependency with a mock database through
    `app.dependency_overrides`.
    """
    return client[settings.mongodb_database]


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def ensure_indexes() -> None:
    """
    Create the indexes the API relies on (idempotent).

    The unique indexes on users.username and users.email are what turn a
    duplicate signup into a DuplicateKeyError, which the user service maps
    to a 409 Conflict.
    """
    db = client[settings.mongodb_database]
    for collection_name, indexes in (
        (USERS_COLLECTION, USER_INDEXES),
        (THOUGHTS_COLLECTION, THOUGHT_INDEXES),
    ):
        if indexes:
            names = await db[collection_name].create_indexes(indexes)
            logger.info("Indexes ensured on %s: %s", collection_name, ", ".join(names))


async def close_client() -> None:
    """Close all pooled connections. Called during application shutdown."""
    client.close()
