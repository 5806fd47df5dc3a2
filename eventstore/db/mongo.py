"""
db/mongo.py
What this file does:
- Creates the async MongoDB client (Motor) for a set of settings.
- Resolves the event collection.
- Builds the instance id index at init (idempotent on the server side).
"""

from __future__ import annotations

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ASCENDING

from ..config import EventStoreSettings

logger = logging.getLogger(__name__)

INSTANCE_ID_FIELD = "instanceid"


def create_client(settings: EventStoreSettings) -> AsyncIOMotorClient:
    return AsyncIOMotorClient(
        settings.address,
        minPoolSize=settings.min_pool_size,
        maxPoolSize=settings.max_pool_size,
        serverSelectionTimeoutMS=settings.server_selection_timeout_ms,
    )


def get_collection(
    client: AsyncIOMotorClient, settings: EventStoreSettings
) -> AsyncIOMotorCollection:
    return client[settings.database_name][settings.collection_name]


async def ensure_indexes(col: AsyncIOMotorCollection) -> None:
    # Events: lookup by owning instance, non-unique
    name = await col.create_index([(INSTANCE_ID_FIELD, ASCENDING)])
    logger.debug("Ensured index %s on %s", name, col.full_name)


async def ping(client: AsyncIOMotorClient) -> bool:
    await client.admin.command("ping")
    return True
