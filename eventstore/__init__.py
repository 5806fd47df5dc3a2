from .config import EventStoreSettings
from .errors import (
    EventNotFoundError,
    EventStoreError,
    EventStoreNotInitializedError,
    EventValidationError,
    InvalidDestinationError,
)
from .schemas import Event, EventEnvelope, EventType
from .store import EventStore, MongoEventStore

__all__ = [
    "Event",
    "EventEnvelope",
    "EventNotFoundError",
    "EventStore",
    "EventStoreError",
    "EventStoreNotInitializedError",
    "EventStoreSettings",
    "EventType",
    "EventValidationError",
    "InvalidDestinationError",
    "MongoEventStore",
]
