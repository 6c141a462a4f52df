# journals router — write, list, search, edit and delete journal entries
# plus one-shot sentiment enrichment and the journal statistics view

import logging
import re
from datetime import date, datetime, timezone
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query

from moodmash.config import settings
from moodmash.dependencies import get_current_user
from moodmash.models.common import BulkDeleteRequest, BulkDeleteResponse, Page
from moodmash.models.journal import (
    JournalBulkCreate,
    JournalCreate,
    JournalEntry,
    JournalUpdate,
    JournalWithMood,
    LinkedMood,
    SentimentLabel,
)
from moodmash.models.stats import JournalStatistics
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
from moodmash.services.sentiment_service import build_enrichment, label_for_score

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/journals", tags=["journals"])

LABEL = "Journal entry"

# fields a patch may not clear
REQUIRED_FIELDS = ("content", "entry_date")

# written by /analyze, frozen once it has run
INSIGHT_FIELDS = ("ai_summary", "ai_suggestions")


def _doc_to_journal(doc: dict) -> JournalEntry:
    """convert a mongodb journal_entries document to the response model"""
    return JournalEntry.model_validate(doc_with_id(doc))


def _new_journal_doc(body: JournalCreate, user_id: str, now: datetime) -> dict:
    doc = body.model_dump(mode="json")
    doc.update({
        "user_id": user_id,
        "entry_date": doc["entry_date"] or now.date().isoformat(),
        "entry_time": doc["entry_time"] or now.strftime("%H:%M"),
        "sentiment_score": None,
        "sentiment_label": None,
        "is_ai_generated": False,
        "ai_summary": None,
        "ai_suggestions": [],
        "created_at": now.isoformat(),
        "updated_at": now.isoformat(),
    })
    return doc


def _check_patch(doc: dict, update_fields: dict):
    """validate a patch against the stored entry it will be merged into"""
    if doc.get("is_ai_generated") and any(k in update_fields for k in INSIGHT_FIELDS):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Insights for this journal entry were already generated",
        )

    if "sentiment_score" not in update_fields and "sentiment_label" not in update_fields:
        return
    score = update_fields.get("sentiment_score", doc.get("sentiment_score"))
    label = update_fields.get("sentiment_label", doc.get("sentiment_label"))
    if score is not None and label is not None and label_for_score(score) != label:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"sentimentLabel '{label}' does not match sentimentScore {score} "
                   f"(expected '{label_for_score(score)}')",
        )


class JournalFilters:
    """list filters shared by /journals and /journals/with-mood"""

    def __init__(
        self,
        start_date: Optional[date] = Query(None, alias="startDate"),
        end_date: Optional[date] = Query(None, alias="endDate"),
        mood_id: Optional[str] = Query(None, alias="moodId"),
        sentiment: Optional[SentimentLabel] = Query(None),
        min_sentiment_score: Optional[float] = Query(None, ge=-1.0, le=1.0, alias="minSentimentScore"),
        max_sentiment_score: Optional[float] = Query(None, ge=-1.0, le=1.0, alias="maxSentimentScore"),
        tags: Optional[list[str]] = Query(None, description="entries carrying any of these tags"),
        has_ai_insights: Optional[bool] = Query(None, alias="hasAiInsights"),
        order_by: Literal["created_at", "entry_date", "sentiment_score"] = Query("created_at", alias="orderBy"),
        order: Literal["asc", "desc"] = Query("desc"),
        page: int = Query(1, ge=1),
        limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    ):
        self.start_date = start_date
        self.end_date = end_date
        self.mood_id = mood_id
        self.sentiment = sentiment
        self.min_sentiment_score = min_sentiment_score
        self.max_sentiment_score = max_sentiment_score
        self.tags = tags
        self.has_ai_insights = has_ai_insights
        self.order_by = order_by
        self.order = order
        self.page = page
        self.limit = limit

    def to_query(self, user_id: str) -> dict:
        query = {"user_id": user_id}

        bounds = date_range_filter(self.start_date, self.end_date)
        if bounds:
            query["entry_date"] = bounds
        if self.mood_id:
            query["mood_id"] = self.mood_id
        if self.sentiment:
            query["sentiment_label"] = self.sentiment

        score = {}
        if self.min_sentiment_score is not None:
            score["$gte"] = self.min_sentiment_score
        if self.max_sentiment_score is not None:
            score["$lte"] = self.max_sentiment_score
        if score:
            query["sentiment_score"] = score

        if self.tags:
            query["tags"] = {"$in": self.tags}
        if self.has_ai_insights is not None:
            query["is_ai_generated"] = self.has_ai_insights
        return query


async def _page_of_journals(db: Database, query: dict, filters: JournalFilters) -> tuple[list[JournalEntry], int]:
    docs, total = await fetch_page(
        db.journal_entries, query, filters.order_by, filters.order, filters.page, filters.limit,
    )
    return [_doc_to_journal(d) for d in docs], total


@router.post("", response_model=JournalEntry, status_code=status.HTTP_201_CREATED)
async def create_journal(
    body: JournalCreate,
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """write a new journal entry. sentiment fields stay empty until /analyze runs."""
    doc = _new_journal_doc(body, current_user["id"], datetime.now(timezone.utc))
    result = await db.journal_entries.insert_one(doc)
    doc["_id"] = result.inserted_id

    logger.info(f"Journal entry created: {result.inserted_id} by user {current_user['id']}")
    return _doc_to_journal(doc)


@router.get("", response_model=Page[JournalEntry])
async def list_journals(
    filters: JournalFilters = Depends(),
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """list the user's journal entries with optional filters"""
    entries, total = await _page_of_journals(db, filters.to_query(current_user["id"]), filters)
    return Page[JournalEntry].build(entries, total, filters.page, filters.limit)


@router.get("/today", response_model=list[JournalEntry])
async def get_today_journals(
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """journal entries dated today (utc), newest first"""
    today = datetime.now(timezone.utc).date().isoformat()
    cursor = db.journal_entries.find(
        {"user_id": current_user["id"], "entry_date": today}
    ).sort("created_at", -1)
    return [_doc_to_journal(doc) async for doc in cursor]


@router.get("/search", response_model=Page[JournalEntry])
async def search_journals(
    q: str = Query(..., min_length=1, max_length=200, description="text to look for in title or content"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """case-insensitive substring search over title and content"""
    pattern = {"$regex": re.escape(q), "$options": "i"}
    query = {
        "user_id": current_user["id"],
        "$or": [{"title": pattern}, {"content": pattern}],
    }
    docs, total = await fetch_page(db.journal_entries, query, "created_at", "desc", page, limit)
    return Page[JournalEntry].build([_doc_to_journal(d) for d in docs], total, page, limit)


@router.get("/with-mood", response_model=Page[JournalWithMood])
async def list_journals_with_mood(
    filters: JournalFilters = Depends(),
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """journal entries joined with the mood entry each one links to"""
    entries, total = await _page_of_journals(db, filters.to_query(current_user["id"]), filters)

    linked_ids = parse_object_ids([e.related_mood_entry for e in entries if e.related_mood_entry])
    moods: dict[str, LinkedMood] = {}
    if linked_ids:
        cursor = db.mood_entries.find(
            {"_id": {"$in": linked_ids}, "user_id": current_user["id"]},
            {"mood_id": 1, "intensity": 1},
        )
        async for doc in cursor:
            mood_id = str(doc["_id"])
            moods[mood_id] = LinkedMood(id=mood_id, moodId=doc.get("mood_id", ""), intensity=doc.get("intensity", 0))

    combined = []
    for entry in entries:
        mood = moods.get(entry.related_mood_entry) if entry.related_mood_entry else None
        if entry.related_mood_entry and mood is None:
            logger.warning(f"Journal {entry.id} links to missing mood entry {entry.related_mood_entry}")
        combined.append(JournalWithMood(journal=entry, moodEntry=mood))

    return Page[JournalWithMood].build(combined, total, filters.page, filters.limit)


@router.get("/stats", response_model=JournalStatistics)
async def get_journal_statistics(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """writing statistics, sentiment mix, top tags and streak for the user"""
    query = {"user_id": current_user["id"]}
    bounds = date_range_filter(start_date, end_date)
    if bounds:
        query["entry_date"] = bounds

    docs = await fetch_all(db.journal_entries, query)
    entries = [_doc_to_journal(doc) for doc in docs]
    return stats_service.get_journal_statistics(entries, start_date, end_date)


@router.post("/bulk", response_model=list[JournalEntry], status_code=status.HTTP_201_CREATED)
async def bulk_create_journals(
    body: JournalBulkCreate,
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """write several journal entries at once (e.g. an import)"""
    now = datetime.now(timezone.utc)
    docs = [_new_journal_doc(entry, current_user["id"], now) for entry in body.entries]
    result = await db.journal_entries.insert_many(docs)
    for doc, oid in zip(docs, result.inserted_ids):
        doc["_id"] = oid

    logger.info(f"Bulk created {len(docs)} journal entries for user {current_user['id']}")
    return [_doc_to_journal(doc) for doc in docs]


@router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_journals(
    body: BulkDeleteRequest,
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """delete several of the user's journal entries; ids of other users' entries are ignored"""
    oids = parse_object_ids(body.ids)
    if not oids:
        return BulkDeleteResponse(deleted=0)

    result = await db.journal_entries.delete_many({"_id": {"$in": oids}, "user_id": current_user["id"]})
    logger.info(f"Bulk deleted {result.deleted_count} journal entries for user {current_user['id']}")
    return BulkDeleteResponse(deleted=result.deleted_count)


@router.post("/{entry_id}/analyze", response_model=JournalEntry)
async def analyze_journal(
    entry_id: str,
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """fill sentiment, summary and suggestions once. an entry that was already
    enriched is returned unchanged."""
    doc = await find_owned(db.journal_entries, current_user["id"], entry_id, LABEL)
    if doc.get("is_ai_generated"):
        logger.info(f"Journal entry {entry_id} already analyzed, skipping")
        return _doc_to_journal(doc)

    query = owned_query(current_user["id"], entry_id, LABEL)
    enrichment = build_enrichment(doc.get("content", ""))
    enrichment["updated_at"] = datetime.now(timezone.utc).isoformat()

    # the is_ai_generated guard keeps concurrent requests from enriching twice
    await db.journal_entries.update_one(
        {**query, "is_ai_generated": {"$ne": True}},
        {"$set": enrichment},
    )

    updated = await db.journal_entries.find_one(query)
    logger.info(f"Journal entry analyzed: {entry_id} ({enrichment['sentiment_label']})")
    return _doc_to_journal(updated)


@router.get("/{entry_id}", response_model=JournalEntry)
async def get_journal(
    entry_id: str,
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    doc = await find_owned(db.journal_entries, current_user["id"], entry_id, LABEL)
    return _doc_to_journal(doc)


@router.patch("/{entry_id}", response_model=JournalEntry)
async def update_journal(
    entry_id: str,
    body: JournalUpdate,
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """update the fields that were sent"""
    query = owned_query(current_user["id"], entry_id, LABEL)
    doc = await find_owned(db.journal_entries, current_user["id"], entry_id, LABEL)

    update_fields = {
        k: v for k, v in body.model_dump(mode="json", exclude_unset=True).items()
        if v is not None or k not in REQUIRED_FIELDS
    }
    _check_patch(doc, update_fields)

    update_fields["updated_at"] = datetime.now(timezone.utc).isoformat()
    await db.journal_entries.update_one(query, {"$set": update_fields})

    updated = await db.journal_entries.find_one(query)
    logger.info(f"Journal entry updated: {entry_id} by user {current_user['id']}")
    return _doc_to_journal(updated)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_journal(
    entry_id: str,
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    query = owned_query(current_user["id"], entry_id, LABEL)
    result = await db.journal_entries.delete_one(query)
    if result.deleted_count == 0:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{LABEL} not found",
        )
    logger.info(f"Journal entry deleted: {entry_id} by user {current_user['id']}")
