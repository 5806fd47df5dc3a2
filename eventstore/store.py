"""
store.py
What this file does:
- Defines the EventStore interface.
- MongoEventStore keeps events of any concrete type in one collection and
  decodes them back into the class the caller names.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional, Type, TypeVar

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pydantic import BaseModel

from . import codec
from .config import EventStoreSettings
from .db import mongo
from .errors import EventNotFoundError, EventStoreNotInitializedError
from .repos import events_repo
from .schemas import Event, EventEnvelope

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=BaseModel)


class EventStore(ABC):
    @abstractmethod
    async def init(self, **overrides: Any) -> None:
        """Connect and prepare the backing collection."""
        ...

    @abstractmethod
    async def create(self, event: Event) -> None:
        ...

    @abstractmethod
    async def update(self, event: Event) -> None:
        ...

    @abstractmethod
    async def get(self, event_id: ObjectId, event_type: Type[E]) -> E:
        ...

    @abstractmethod
    async def list(self, event_type: Type[E]) -> List[E]:
        ...

    @abstractmethod
    async def list_filtered(
        self, event_type: Type[E], q: Optional[Mapping[str, Any]]
    ) -> List[E]:
        ...


class MongoEventStore(EventStore):
    def __init__(self, settings: EventStoreSettings | None = None):
        self.settings = settings or EventStoreSettings()
        self._client: Optional[AsyncIOMotorClient] = None
        self._col: Optional[AsyncIOMotorCollection] = None

    async def __aenter__(self) -> "MongoEventStore":
        await self.init()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def init(self, **overrides: Any) -> None:
        """
        Open the Motor client and make sure the instance id index exists.

        Keyword overrides replace settings fields (address, database_name,
        collection_name, ...). A client from an earlier init is closed first.
        Fails with the driver error if the server can't be reached or the
        index can't be built.
        """
        if overrides:
            self.settings = self.settings.with_overrides(**overrides)
        await self.close()
        client = mongo.create_client(self.settings)
        try:
            col = mongo.get_collection(client, self.settings)
            await mongo.ensure_indexes(col)
        except Exception:
            client.close()
            raise
        self._client = client
        self._col = col
        logger.info(
            "Event store ready on %s (db=%s, collection=%s)",
            self.settings.address,
            self.settings.database_name,
            self.settings.collection_name,
        )

    async def close(self) -> None:
        if self._client is None:
            return
        self._client.close()
        self._client = None
        self._col = None
        logger.info("Event store closed")

    async def ping(self) -> bool:
        if self._client is None:
            raise EventStoreNotInitializedError()
        return await mongo.ping(self._client)

    def _collection(self) -> AsyncIOMotorCollection:
        if self._col is None:
            raise EventStoreNotInitializedError()
        return self._col

    async def create(self, event: Event) -> None:
        codec.validate_event(event)
        col = self._collection()
        envelope = codec.build_envelope(event)
        await events_repo.insert_envelope(col, envelope.to_document())
        logger.debug("Created event %s (type=%s)", envelope.id, envelope.type)

    async def update(self, event: Event) -> None:
        """Replace the stored event with the same id; EventNotFoundError if there is none."""
        codec.validate_event(event)
        col = self._collection()
        envelope = codec.build_envelope(event)
        matched = await events_repo.replace_envelope(col, envelope.id, envelope.to_document())
        if matched == 0:
            raise EventNotFoundError(envelope.id)
        logger.debug("Updated event %s (type=%s)", envelope.id, envelope.type)

    async def get(self, event_id: ObjectId, event_type: Type[E]) -> E:
        codec.check_destination(event_type)
        doc = await events_repo.find_envelope(self._collection(), event_id)
        if doc is None:
            raise EventNotFoundError(event_id)
        return codec.from_envelope(event_type, EventEnvelope.model_validate(doc))

    async def list(self, event_type: Type[E]) -> List[E]:
        return await self._list(event_type, None)

    async def list_filtered(
        self, event_type: Type[E], q: Optional[Mapping[str, Any]]
    ) -> List[E]:
        """Like list(), with a MongoDB filter passed through to find() untouched."""
        return await self._list(event_type, q)

    async def _list(self, event_type: Type[E], q: Optional[Mapping[str, Any]]) -> List[E]:
        codec.check_destination(event_type)
        docs = await events_repo.find_envelopes(self._collection(), q)
        out: List[E] = []
        for d in docs:
            out.append(codec.from_envelope(event_type, EventEnvelope.model_validate(d)))
        logger.debug("Listed %s %s event(s)", len(out), event_type.__name__)
        return out
