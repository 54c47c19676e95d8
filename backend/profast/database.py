"""
ProFast Backend - MongoDB Client Management
============================================

What:  Async MongoDB client, database dependency, collection names, startup
       ping and index creation.
Why:   Centralizes all connection logic; services only ever receive a database
       handle and never build clients themselves.
How:   One AsyncMongoClient per process (created lazily on first use), Stable
       API v1, connection pool managed by the driver.
Who:   Route handlers receive the database via FastAPI's Depends(get_database).
When:  Client is created on first use; pinged and indexed during startup;
       closed on shutdown.

Collections:
    users           User profiles, keyed by email
    parcels         Delivery orders
    parcelTracking  Append-only tracking events
    paymentHistory  One record per confirmed payment
"""

import logging
from typing import Optional

from pymongo import ASCENDING, DESCENDING, AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from profast.config import settings

logger = logging.getLogger(__name__)


# ── Collection Names ──────────────────────────────────────────────────────
USERS = "users"
PARCELS = "parcels"
PARCEL_TRACKING = "parcelTracking"
PAYMENT_HISTORY = "paymentHistory"


_client: Optional[AsyncMongoClient] = None


def get_client() -> AsyncMongoClient:
    """
    Return the process-wide MongoDB client, creating it on first call.

    Stable API v1 in strict mode makes the server reject commands outside
    the versioned API instead of silently accepting them.
    """
    global _client
    if _client is None:
        _client = AsyncMongoClient(
            settings.database_uri,
            server_api=ServerApi("1", strict=True, deprecation_errors=True),
            serverSelectionTimeoutMS=settings.db_server_selection_timeout_ms,
            tz_aware=True,
        )
    return _client


async def get_database() -> AsyncDatabase:
    """
    FastAPI dependency that provides the application database.

    Example usage in a route:
        @router.get("/parcels")
        async def list_parcels(db: AsyncDatabase = Depends(get_database)):
            ...
    """
    return get_client()[settings.db_name]


@retry(
    retry=retry_if_exception_type(PyMongoError),
    stop=stop_after_attempt(settings.db_connect_attempts),
    wait=wait_exponential_jitter(initial=1, max=10, jitter=1),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
async def ping_database() -> None:
    """
    Confirm the deployment is reachable.

    Retried with backoff because the cluster may still be starting when the
    container comes up. Only used at startup; request paths never retry.
    """
    await get_client().admin.command({"ping": 1})
    logger.info("Pinged MongoDB deployment; connection established")


async def ensure_indexes(db: AsyncDatabase) -> None:
    """
    Create the indexes behind the query patterns the services use.

    users.email is unique so that two concurrent registrations for the same
    email cannot both insert. create_index is a no-op when the index exists.
    """
    await db[USERS].create_index([("email", ASCENDING)], unique=True, name="uniq_email")
    await db[PARCELS].create_index(
        [("created_by", ASCENDING), ("creation_date", DESCENDING)],
        name="created_by_creation_date",
    )
    await db[PAYMENT_HISTORY].create_index(
        [("email", ASCENDING), ("paid_at", DESCENDING)],
        name="email_paid_at",
    )
    await db[PARCEL_TRACKING].create_index(
        [("trackingId", ASCENDING), ("updatedAt", ASCENDING)],
        name="tracking_id_updated_at",
    )
    logger.info("MongoDB indexes ensured on database %s", db.name)


async def close_client() -> None:
    """Close the client and its pooled connections (application shutdown)."""
    global _client
    if _client is not None:
        await _client.close()
        _client = None
