"""
FastAPI dependency injection for the MongoDB client and repository.

Provides injectable dependencies for:
- The pymongo async client (created once at startup)
- The database handle
- The DogWalkingRepository built on top of it

Tests replace ``get_repository`` through ``app.dependency_overrides``.
"""

import structlog
from typing import Optional

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from api.src.config import Settings, get_settings
from api.src.repositories.booking_repo import DogWalkingRepository

logger = structlog.get_logger(__name__)


# ============================================================================
# MONGODB CLIENT
# ============================================================================

_client: Optional[AsyncMongoClient] = None


async def init_database(settings: Optional[Settings] = None) -> AsyncDatabase:
    """
    Connect to MongoDB and return the application database.

    Should be called during application startup. Failure here is fatal:
    the error is logged and re-raised so the process does not start.

    Returns:
        Database handle

    Raises:
        PyMongoError: If the server cannot be reached
    """
    global _client

    settings = settings or get_settings()

    if _client is None:
        _client = AsyncMongoClient(
            settings.mongodb_uri,
            tz_aware=True,
            serverSelectionTimeoutMS=settings.mongodb_server_selection_timeout_ms,
        )

    try:
        await _client.admin.command("ping")
    except PyMongoError as e:
        logger.error(
            "database_init_failed",
            error=str(e),
            uri=settings.mongodb_uri_redacted
        )
        await close_database()
        raise

    logger.info(
        "database_connected",
        uri=settings.mongodb_uri_redacted,
        database=settings.mongodb_database
    )

    return _client[settings.mongodb_database]


async def close_database():
    """
    Close the MongoDB client.

    Should be called during application shutdown.
    """
    global _client

    if _client is not None:
        await _client.close()
        logger.info("database_closed")
        _client = None


def get_database() -> AsyncDatabase:
    """
    Get the application database handle.

    Raises:
        RuntimeError: If the client is not initialized
    """
    if _client is None:
        logger.error("database_not_initialized")
        raise RuntimeError(
            "MongoDB client not initialized. Call init_database() during startup."
        )
    return _client[get_settings().mongodb_database]


# ============================================================================
# REPOSITORIES
# ============================================================================


def get_repository() -> DogWalkingRepository:
    """
    Get the dog walking repository.

    Returns:
        Repository bound to the application database
    """
    return DogWalkingRepository(get_database(), get_settings())
