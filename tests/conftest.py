"""Shared fixtures: a fake Motor collection and a store wired to it."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Dict, Mapping, Optional
from unittest.mock import MagicMock

import bson
import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from eventstore import Event, EventStoreSettings, MongoEventStore
from eventstore.db import mongo

_MISSING = object()


class SampleEvent(Event):
    event_type = 101

    string: str = ""


class OtherEvent(Event):
    event_type = 102

    count: int = 0
    tags: list[str] = []


def _lookup(doc: Mapping[str, Any], path: str) -> Any:
    cur: Any = doc
    for part in path.split("."):
        if not isinstance(cur, Mapping) or part not in cur:
            return _MISSING
        cur = cur[part]
    return cur


def _matches(doc: Mapping[str, Any], q: Optional[Mapping[str, Any]]) -> bool:
    return all(_lookup(doc, k) == v for k, v in (q or {}).items())


class _FakeCursor:
    def __init__(self, docs):
        self._docs = list(docs)

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for d in self._docs:
            yield d


class FakeCollection:
    """Just enough of AsyncIOMotorCollection for the event store."""

    full_name = "event-sourcing-test.tests"

    def __init__(self):
        self.docs: Dict[ObjectId, dict] = {}
        self.indexes: list = []

    @staticmethod
    def _roundtrip(doc: Mapping[str, Any]) -> dict:
        # same trip a document takes to the server and back
        return bson.decode(bson.encode(doc))

    async def create_index(self, keys, **kwargs):
        if keys not in self.indexes:
            self.indexes.append(keys)
        return "_".join(f"{k}_{d}" for k, d in keys)

    async def insert_one(self, doc):
        stored = self._roundtrip(doc)
        if stored["_id"] in self.docs:
            raise DuplicateKeyError(f"E11000 duplicate key error _id: {stored['_id']}")
        self.docs[stored["_id"]] = stored
        return SimpleNamespace(inserted_id=stored["_id"])

    async def replace_one(self, q, doc):
        for _id, existing in self.docs.items():
            if _matches(existing, q):
                stored = self._roundtrip(doc)
                stored["_id"] = _id
                self.docs[_id] = stored
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def find_one(self, q):
        for d in self.docs.values():
            if _matches(d, q):
                return d
        return None

    def find(self, q=None):
        return _FakeCursor(d for d in self.docs.values() if _matches(d, q))


@pytest.fixture
def settings() -> EventStoreSettings:
    return EventStoreSettings(
        address="localhost:27017",
        database_name="event-sourcing-test",
        collection_name="tests",
    )


@pytest.fixture
def fake_collection() -> FakeCollection:
    return FakeCollection()


@pytest.fixture
def fake_client() -> MagicMock:
    return MagicMock()


@pytest.fixture
async def store(monkeypatch, settings, fake_collection, fake_client):
    monkeypatch.setattr(mongo, "create_client", lambda s: fake_client)
    monkeypatch.setattr(mongo, "get_collection", lambda c, s: fake_collection)
    s = MongoEventStore(settings)
    await s.init()
    yield s
    await s.close()


def new_sample(string: str = "This is a test of some data") -> SampleEvent:
    return SampleEvent(id=ObjectId(), instance_id=ObjectId(), string=string)
