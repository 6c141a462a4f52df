# moods router — log, list, edit and delete mood entries, plus the
# mood statistics, overview and trend views computed by the stats engine

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query

from moodmash.config import settings
from moodmash.dependencies import get_current_user
from moodmash.models.common import BulkDeleteRequest, BulkDeleteResponse, Page, as_utc
from moodmash.models.mood import MoodBulkCreate, MoodCreate, MoodEntry, MoodUpdate
from moodmash.models.stats import MoodCatalogItem, MoodOverview, MoodStatistics, MoodTrendPoint
from moodmash.insights.lexicon import MOOD_CATALOG
from moodmash.services import stats_service
from moodmash.services.db import Database, get_db
from moodmash.services.entry_store import (
    date_range_filter,
    doc_with_id,
    fetch_all,
    fetch_page,
    find_owned,
    owned_query,
    parse_object_ids,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/moods", tags=["moods"])

LABEL = "Mood entry"

# fields a patch may not clear
REQUIRED_FIELDS = ("mood_id", "intensity", "entry_date")


def _doc_to_mood(doc: dict) -> MoodEntry:
    """convert a mongodb mood_entries document to the response model"""
    return MoodEntry.model_validate(doc_with_id(doc))


def _new_mood_doc(body: MoodCreate, user_id: str, now: datetime) -> dict:
    doc = body.model_dump(mode="json")
    doc["user_id"] = user_id
    doc["entry_date"] = doc["entry_date"] or now.date().isoformat()
    doc["entry_time"] = doc["entry_time"] or now.strftime("%H:%M")
    doc["created_at"] = now.isoformat()
    doc["updated_at"] = now.isoformat()
    return doc


async def _load_moods(db: Database, user_id: str, start_date=None, end_date=None) -> list[MoodEntry]:
    query = {"user_id": user_id}
    bounds = date_range_filter(start_date, end_date)
    if bounds:
        query["entry_date"] = bounds
    docs = await fetch_all(db.mood_entries, query)
    return [_doc_to_mood(doc) for doc in docs]


@router.post("", response_model=MoodEntry, status_code=status.HTTP_201_CREATED)
async def create_mood(
    body: MoodCreate,
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """log a new mood entry"""
    doc = _new_mood_doc(body, current_user["id"], datetime.now(timezone.utc))
    result = await db.mood_entries.insert_one(doc)
    doc["_id"] = result.inserted_id

    logger.info(f"Mood entry created: {result.inserted_id} by user {current_user['id']}")
    return _doc_to_mood(doc)


@router.get("", response_model=Page[MoodEntry])
async def list_moods(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    mood_ids: Optional[list[str]] = Query(None, alias="moodIds"),
    min_intensity: Optional[int] = Query(None, ge=1, le=10, alias="minIntensity"),
    max_intensity: Optional[int] = Query(None, ge=1, le=10, alias="maxIntensity"),
    order_by: Literal["created_at", "entry_date", "intensity"] = Query("created_at", alias="orderBy"),
    order: Literal["asc", "desc"] = Query("desc"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """list the user's mood entries with optional filters"""
    query = {"user_id": current_user["id"]}

    bounds = date_range_filter(start_date, end_date)
    if bounds:
        query["entry_date"] = bounds
    if mood_ids:
        query["mood_id"] = {"$in": mood_ids}

    intensity = {}
    if min_intensity is not None:
        intensity["$gte"] = min_intensity
    if max_intensity is not None:
        intensity["$lte"] = max_intensity
    if intensity:
        query["intensity"] = intensity

    docs, total = await fetch_page(db.mood_entries, query, order_by, order, page, limit)
    return Page[MoodEntry].build([_doc_to_mood(d) for d in docs], total, page, limit)


@router.get("/today", response_model=list[MoodEntry])
async def get_today_moods(
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """mood entries dated today (utc), newest first"""
    today = datetime.now(timezone.utc).date().isoformat()
    cursor = db.mood_entries.find(
        {"user_id": current_user["id"], "entry_date": today}
    ).sort("created_at", -1)
    return [_doc_to_mood(doc) async for doc in cursor]


@router.get("/recent", response_model=list[MoodEntry])
async def get_recent_moods(
    days: int = Query(7, ge=1, le=365),
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """mood entries created in the last N days, newest first"""
    cutoff = (datetime.now(timezone.utc) - timedelta(days=days)).isoformat()
    cursor = db.mood_entries.find(
        {"user_id": current_user["id"], "created_at": {"$gte": cutoff}}
    ).sort("created_at", -1)
    return [_doc_to_mood(doc) async for doc in cursor]


@router.get("/catalog", response_model=list[MoodCatalogItem])
async def get_mood_catalog():
    """supported mood categories with their emoji and label"""
    return [
        MoodCatalogItem(moodId=key, emoji=MOOD_CATALOG.emoji(key), label=MOOD_CATALOG.label(key))
        for key in MOOD_CATALOG.keys()
    ]


@router.get("/overview", response_model=MoodOverview)
async def get_mood_overview(
    start: Optional[datetime] = Query(None, description="inclusive lower bound on createdAt"),
    end: Optional[datetime] = Query(None, description="inclusive upper bound on createdAt"),
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """average intensity, most frequent mood and per-day counts"""
    start, end = as_utc(start), as_utc(end)
    if start and end and start > end:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="start must not be after end",
        )
    entries = await _load_moods(db, current_user["id"])
    return stats_service.summarize_moods(entries, start, end)


@router.get("/stats", response_model=MoodStatistics)
async def get_mood_statistics(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """mood statistics for the user, optionally limited to an entry_date range"""
    entries = await _load_moods(db, current_user["id"], start_date, end_date)
    return stats_service.get_mood_statistics(entries, start_date, end_date)


@router.get("/trend", response_model=list[MoodTrendPoint])
async def get_mood_trend(
    days: int = Query(30, ge=1, le=365),
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """daily mood averages for the last N days"""
    start_date = (datetime.now(timezone.utc) - timedelta(days=days)).date()
    entries = await _load_moods(db, current_user["id"], start_date=start_date)
    return stats_service.get_mood_trend(entries)


@router.post("/bulk", response_model=list[MoodEntry], status_code=status.HTTP_201_CREATED)
async def bulk_create_moods(
    body: MoodBulkCreate,
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """log several mood entries at once (e.g. an import)"""
    now = datetime.now(timezone.utc)
    docs = [_new_mood_doc(entry, current_user["id"], now) for entry in body.entries]
    result = await db.mood_entries.insert_many(docs)
    for doc, oid in zip(docs, result.inserted_ids):
        doc["_id"] = oid

    logger.info(f"Bulk created {len(docs)} mood entries for user {current_user['id']}")
    return [_doc_to_mood(doc) for doc in docs]


@router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_moods(
    body: BulkDeleteRequest,
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """delete several of the user's mood entries; ids of other users' entries are ignored"""
    oids = parse_object_ids(body.ids)
    if not oids:
        return BulkDeleteResponse(deleted=0)

    result = await db.mood_entries.delete_many({"_id": {"$in": oids}, "user_id": current_user["id"]})
    logger.info(f"Bulk deleted {result.deleted_count} mood entries for user {current_user['id']}")
    return BulkDeleteResponse(deleted=result.deleted_count)


@router.get("/{entry_id}", response_model=MoodEntry)
async def get_mood(
    entry_id: str,
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    doc = await find_owned(db.mood_entries, current_user["id"], entry_id, LABEL)
    return _doc_to_mood(doc)


@router.patch("/{entry_id}", response_model=MoodEntry)
async def update_mood(
    entry_id: str,
    body: MoodUpdate,
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """update the fields that were sent"""
    query = owned_query(current_user["id"], entry_id, LABEL)
    await find_owned(db.mood_entries, current_user["id"], entry_id, LABEL)

    update_fields = {
        k: v for k, v in body.model_dump(mode="json", exclude_unset=True).items()
        if v is not None or k not in REQUIRED_FIELDS
    }
    update_fields["updated_at"] = datetime.now(timezone.utc).isoformat()
    await db.mood_entries.update_one(query, {"$set": update_fields})

    updated = await db.mood_entries.find_one(query)
    logger.info(f"Mood entry updated: {entry_id} by user {current_user['id']}")
    return _doc_to_mood(updated)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_mood(
    entry_id: str,
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    query = owned_query(current_user["id"], entry_id, LABEL)
    result = await db.mood_entries.delete_one(query)
    if result.deleted_count == 0:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{LABEL} not found",
        )
    logger.info(f"Mood entry deleted: {entry_id} by user {current_user['id']}")
