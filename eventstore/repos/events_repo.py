"""
events_repo.py
- Envelope-level reads and writes against the event collection.
- No validation or decoding here; callers pass and receive plain documents.
"""

from __future__ import annotations
from typing import Optional, List, Dict, Any, Mapping

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection


async def insert_envelope(col: AsyncIOMotorCollection, doc: Dict[str, Any]) -> ObjectId:
    r = await col.insert_one(doc)
    return r.inserted_id


async def replace_envelope(
    col: AsyncIOMotorCollection, event_id: ObjectId, doc: Dict[str, Any]
) -> int:
    r = await col.replace_one({"_id": event_id}, doc)
    return r.matched_count


async def find_envelope(col: AsyncIOMotorCollection, event_id: ObjectId) -> Optional[dict]:
    return await col.find_one({"_id": event_id})


async def find_envelopes(
    col: AsyncIOMotorCollection, q: Optional[Mapping[str, Any]] = None
) -> List[dict]:
    cur = col.find(q or {})
    out = []
    async for d in cur:
        out.append(d)
    return out
