# entry store helpers — user-scoped lookups and pagination shared by the
# mood and journal routers. every query built here carries the owner's user_id.

import logging
from datetime import date
from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import HTTPException, status

logger = logging.getLogger(__name__)


def parse_object_id(entry_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(entry_id)
    except (InvalidId, TypeError):
        return None


def parse_object_ids(entry_ids: list[str]) -> list[ObjectId]:
    """convert ids, dropping the ones that can never match a document"""
    parsed = []
    for entry_id in entry_ids:
        oid = parse_object_id(entry_id)
        if oid is None:
            logger.warning(f"Ignoring malformed entry id: {entry_id}")
            continue
        parsed.append(oid)
    return parsed


def doc_with_id(doc: dict) -> dict:
    """mongodb document -> plain dict with a string id instead of _id"""
    data = {k: v for k, v in doc.items() if k != "_id"}
    data["id"] = str(doc["_id"])
    return data


def owned_query(user_id: str, entry_id: str, label: str) -> dict:
    """filter matching one entry of one user; unknown ids are a 404"""
    oid = parse_object_id(entry_id)
    if oid is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{label} not found",
        )
    return {"_id": oid, "user_id": user_id}


async def find_owned(collection, user_id: str, entry_id: str, label: str) -> dict:
    """fetch an entry that belongs to the user. entries of other users are
    reported exactly like missing ones."""
    query = owned_query(user_id, entry_id, label)
    doc = await collection.find_one(query)
    if not doc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{label} not found",
        )
    return doc


def date_range_filter(start_date: Optional[date], end_date: Optional[date]) -> dict:
    """inclusive entry_date bounds; dates are stored as yyyy-mm-dd strings"""
    bounds: dict[str, Any] = {}
    if start_date:
        bounds["$gte"] = start_date.isoformat()
    if end_date:
        bounds["$lte"] = end_date.isoformat()
    return bounds


async def fetch_page(
    collection, query: dict, order_by: str, order: str, page: int, limit: int,
) -> tuple[list[dict], int]:
    """one page of documents plus the total match count"""
    total = await collection.count_documents(query)
    direction = 1 if order == "asc" else -1
    cursor = collection.find(query).sort(order_by, direction).skip((page - 1) * limit).limit(limit)
    docs = await cursor.to_list(length=limit)
    return docs, total


async def fetch_all(collection, query: dict, order_by: str = "created_at") -> list[dict]:
    """every matching document, oldest first"""
    cursor = collection.find(query).sort(order_by, 1)
    return await cursor.to_list(length=None)
