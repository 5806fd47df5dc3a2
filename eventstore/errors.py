"""
errors.py
Error kinds raised by the event store itself.
Driver failures (pymongo / bson) are not wrapped and reach the caller as-is.
"""

from __future__ import annotations

from typing import Any


class EventStoreError(Exception):
    """Base class for event store errors."""


class EventNotFoundError(EventStoreError):
    def __init__(self, event_id: Any) -> None:
        self.event_id = event_id
        super().__init__(f"event not found: {event_id}")


class InvalidDestinationError(EventStoreError):
    """Destination is not a model class that events can be decoded into."""

    def __init__(self, destination: Any) -> None:
        self.destination = destination
        super().__init__(
            f"destination must be an event model class, got {destination!r}"
        )


class EventValidationError(EventStoreError):
    def __init__(self, field: str, value: Any) -> None:
        self.field = field
        self.value = value
        super().__init__(f"event not valid: {field} = {value!r}")


class EventStoreNotInitializedError(EventStoreError):
    def __init__(self) -> None:
        super().__init__("event store is not initialized, call init() first")
