"""
codec.py
What this file does:
- Turns any Event into an EventEnvelope, keeping the full event as raw BSON.
- Turns a stored envelope back into whatever model class the caller asks for.
- Checks ids before anything is written.

Decoding is structural: fields are matched by name, so an envelope written by
one event class can be read into another class that shares field names.
"""

from __future__ import annotations

import inspect
from typing import Any, Dict, Mapping, Type, TypeVar

import bson
from bson import ObjectId
from bson.raw_bson import RawBSONDocument
from pydantic import BaseModel

from .errors import EventValidationError, InvalidDestinationError
from .schemas import Event, EventEnvelope

E = TypeVar("E", bound=BaseModel)


def to_bson_raw(event: BaseModel) -> RawBSONDocument:
    return RawBSONDocument(bson.encode(event.model_dump()))


def build_envelope(event: Event) -> EventEnvelope:
    return EventEnvelope(
        _id=event.get_id(),
        instanceid=event.get_instance_id(),
        type=event.get_type(),
        raw=to_bson_raw(event),
    )


def raw_to_dict(raw: Any) -> Dict[str, Any]:
    if isinstance(raw, RawBSONDocument):
        return bson.decode(raw.raw)
    if isinstance(raw, (bytes, bytearray)):
        return bson.decode(bytes(raw))
    if isinstance(raw, Mapping):
        return dict(raw)
    raise TypeError(f"unsupported raw payload type: {type(raw).__name__}")


def from_envelope(event_type: Type[E], envelope: EventEnvelope) -> E:
    return event_type.model_validate(raw_to_dict(envelope.raw))


def check_destination(event_type: Any) -> None:
    if not (inspect.isclass(event_type) and issubclass(event_type, BaseModel)):
        raise InvalidDestinationError(event_type)


def _valid_object_id(value: Any) -> bool:
    return isinstance(value, ObjectId)


def validate_event(event: Event) -> None:
    if not _valid_object_id(event.get_id()):
        raise EventValidationError("id", event.get_id())
    if not _valid_object_id(event.get_instance_id()):
        raise EventValidationError("instance_id", event.get_instance_id())
