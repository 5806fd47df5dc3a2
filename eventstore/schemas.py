# Data objects for the event store.
# Event is what callers subclass; EventEnvelope is the shape that lands in MongoDB.

from __future__ import annotations

from typing import Any, ClassVar, Dict, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field

EventType = int


class Event(BaseModel):
    """
    Base class for storable events.

    Subclasses set ``event_type`` and add whatever payload fields they need.
    Both ids default to None so an empty event can be built; the store rejects
    it on create/update.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    event_type: ClassVar[EventType] = 0

    id: Optional[ObjectId] = None
    instance_id: Optional[ObjectId] = None

    def get_id(self) -> Optional[ObjectId]:
        return self.id

    def get_instance_id(self) -> Optional[ObjectId]:
        return self.instance_id

    def get_type(self) -> EventType:
        return type(self).event_type


class EventEnvelope(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    id: ObjectId = Field(alias="_id")
    instance_id: ObjectId = Field(alias="instanceid")
    type: EventType
    # full BSON document of the event (RawBSONDocument on write, dict on read)
    raw: Any

    def to_document(self) -> Dict[str, Any]:
        return {
            "_id": self.id,
            "instanceid": self.instance_id,
            "type": self.type,
            "raw": self.raw,
        }
