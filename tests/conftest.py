# shared fixtures for backend api tests
# provides mock db, test users, auth tokens, and httpx test clients

import copy
import re

import pytest
import pytest_asyncio
from unittest.mock import MagicMock
from datetime import datetime, timezone, timedelta
from bson import ObjectId

from httpx import AsyncClient, ASGITransport

from moodmash.main import app
from moodmash.services.db import get_db
from moodmash.services.auth_service import hash_password, create_access_token
from moodmash.dependencies import get_current_user


# test ids
USER_OID = ObjectId("665f1c2a9b1e8a0001a10001")
OTHER_USER_OID = ObjectId("665f1c2a9b1e8a0001a10002")
USER_ID = str(USER_OID)
OTHER_USER_ID = str(OTHER_USER_OID)


# test user documents (as they'd appear from mongodb)

USER_DOC = {
    "_id": USER_OID,
    "email": "alex.rivera@email.com",
    "hashed_password": hash_password("moodmash123"),
    "name": "Alex Rivera",
    "created_at": "2025-06-01T00:00:00+00:00",
}

OTHER_USER_DOC = {
    "_id": OTHER_USER_OID,
    "email": "jordan.kim@email.com",
    "hashed_password": hash_password("moodmash123"),
    "name": "Jordan Kim",
    "created_at": "2025-05-15T00:00:00+00:00",
}


# sample data

MOOD_OID = ObjectId("665f1c2a9b1e8a0001b20001")
OTHER_MOOD_OID = ObjectId("665f1c2a9b1e8a0001b20002")
JOURNAL_OID = ObjectId("665f1c2a9b1e8a0001c30001")
JOURNAL_2_OID = ObjectId("665f1c2a9b1e8a0001c30002")
OTHER_JOURNAL_OID = ObjectId("665f1c2a9b1e8a0001c30003")

SAMPLE_MOOD = {
    "_id": MOOD_OID,
    "user_id": USER_ID,
    "mood_id": "happy",
    "mood_label": "Happy",
    "intensity": 8,
    "note": "Great day!",
    "tags": ["sunny"],
    "activities": ["walk"],
    "entry_date": "2025-06-10",
    "entry_time": "12:00",
    "created_at": "2025-06-10T12:00:00+00:00",
    "updated_at": "2025-06-10T12:00:00+00:00",
}

SAMPLE_MOOD_2 = {
    "_id": ObjectId("665f1c2a9b1e8a0001b20003"),
    "user_id": USER_ID,
    "mood_id": "anxious",
    "mood_label": "Anxious",
    "intensity": 3,
    "note": None,
    "tags": [],
    "activities": [],
    "entry_date": "2025-06-12",
    "entry_time": "09:30",
    "created_at": "2025-06-12T09:30:00+00:00",
    "updated_at": "2025-06-12T09:30:00+00:00",
}

OTHER_USER_MOOD = {
    "_id": OTHER_MOOD_OID,
    "user_id": OTHER_USER_ID,
    "mood_id": "sad",
    "intensity": 2,
    "tags": [],
    "activities": [],
    "entry_date": "2025-06-10",
    "entry_time": "08:00",
    "created_at": "2025-06-10T08:00:00+00:00",
    "updated_at": "2025-06-10T08:00:00+00:00",
}

SAMPLE_JOURNAL = {
    "_id": JOURNAL_OID,
    "user_id": USER_ID,
    "title": "Work deadline",
    "content": "Today I felt really anxious about my work deadline. The pressure is overwhelming.",
    "mood_id": "anxious",
    "mood_intensity": 3,
    "tags": ["work", "stress"],
    "activities": [],
    "sentiment_score": None,
    "sentiment_label": None,
    "is_ai_generated": False,
    "ai_summary": None,
    "ai_suggestions": [],
    "related_mood_entry": str(MOOD_OID),
    "entry_date": "2025-06-10",
    "entry_time": "12:00",
    "created_at": "2025-06-10T12:00:00+00:00",
    "updated_at": "2025-06-10T12:00:00+00:00",
}

SAMPLE_JOURNAL_2 = {
    "_id": JOURNAL_2_OID,
    "user_id": USER_ID,
    "title": "Better",
    "content": "Feeling much better today. Therapy session was really helpful.",
    "mood_id": "calm",
    "tags": ["therapy", "work"],
    "activities": [],
    "sentiment_score": 0.5,
    "sentiment_label": "positive",
    "is_ai_generated": True,
    "ai_summary": "Journal entry about: Feeling much better today...",
    "ai_suggestions": ["Consider writing about what made you feel this way"],
    "related_mood_entry": None,
    "entry_date": "2025-06-13",
    "entry_time": "18:00",
    "created_at": "2025-06-13T18:00:00+00:00",
    "updated_at": "2025-06-13T18:00:00+00:00",
}

OTHER_USER_JOURNAL = {
    "_id": OTHER_JOURNAL_OID,
    "user_id": OTHER_USER_ID,
    "title": "Private",
    "content": "Someone else's deadline thoughts.",
    "tags": ["work"],
    "activities": [],
    "is_ai_generated": False,
    "entry_date": "2025-06-11",
    "created_at": "2025-06-11T10:00:00+00:00",
}


# async cursor mock

class AsyncCursorMock:
    """mock for motor's async cursor — supports async for and chained methods"""

    def __init__(self, data=None):
        self._data = list(data or [])
        self._index = 0

    def sort(self, key, direction=1):
        present = [d for d in self._data if d.get(key) is not None]
        missing = [d for d in self._data if d.get(key) is None]
        present.sort(key=lambda d: d[key], reverse=direction == -1)
        self._data = present + missing
        return self

    def skip(self, n):
        self._data = self._data[n:]
        return self

    def limit(self, n):
        self._data = self._data[:n]
        return self

    def __aiter__(self):
        self._index = 0
        return self

    async def __anext__(self):
        if self._index >= len(self._data):
            raise StopAsyncIteration
        item = self._data[self._index]
        self._index += 1
        return item

    async def to_list(self, length=None):
        if length is not None:
            return self._data[:length]
        return self._data


class MockCollection:
    """mock for a motor collection with async methods"""

    def __init__(self, data=None):
        self._data = data or []
        self.inserted = []

    def find(self, query=None, projection=None):
        results = self._data
        if query:
            results = [d for d in results if self._matches(d, query)]
        return AsyncCursorMock(results)

    async def find_one(self, query=None, projection=None):
        if not query:
            return self._data[0] if self._data else None
        for doc in self._data:
            if self._matches(doc, query):
                return doc
        return None

    async def insert_one(self, doc):
        oid = doc.get("_id", ObjectId())
        doc["_id"] = oid
        self._data.append(doc)
        self.inserted.append(doc)
        result = MagicMock()
        result.inserted_id = oid
        return result

    async def insert_many(self, docs):
        ids = []
        for doc in docs:
            result = await self.insert_one(doc)
            ids.append(result.inserted_id)
        result = MagicMock()
        result.inserted_ids = ids
        return result

    async def count_documents(self, query=None):
        if not query:
            return len(self._data)
        return len([d for d in self._data if self._matches(d, query)])

    async def update_one(self, query, update, upsert=False):
        result = MagicMock()
        result.matched_count = 0
        result.modified_count = 0
        for doc in self._data:
            if self._matches(doc, query):
                if "$set" in update:
                    doc.update(update["$set"])
                result.matched_count = 1
                result.modified_count = 1
                break
        return result

    async def delete_one(self, query):
        result = MagicMock()
        result.deleted_count = 0
        for i, doc in enumerate(self._data):
            if self._matches(doc, query):
                del self._data[i]
                result.deleted_count = 1
                break
        return result

    async def delete_many(self, query):
        keep = [d for d in self._data if not self._matches(d, query)]
        result = MagicMock()
        result.deleted_count = len(self._data) - len(keep)
        self._data[:] = keep
        return result

    async def create_index(self, *args, **kwargs):
        return "mock_index"

    def _matches(self, doc, query):
        """basic mongodb query matching for tests"""
        for key, value in query.items():
            if key == "$or":
                if not any(self._matches(doc, cond) for cond in value):
                    return False
                continue
            doc_val = doc.get(key)
            if isinstance(value, dict):
                if not self._matches_operators(doc_val, value):
                    return False
            elif isinstance(doc_val, list):
                if value not in doc_val:
                    return False
            elif doc_val != value:
                return False
        return True

    def _matches_operators(self, doc_val, ops):
        for op, arg in ops.items():
            if op == "$in":
                if isinstance(doc_val, list):
                    if not any(v in arg for v in doc_val):
                        return False
                elif doc_val not in arg:
                    return False
            elif op == "$ne":
                if doc_val == arg:
                    return False
            elif op in ("$gte", "$lte", "$gt", "$lt"):
                if doc_val is None:
                    return False
                if op == "$gte" and not doc_val >= arg:
                    return False
                if op == "$lte" and not doc_val <= arg:
                    return False
                if op == "$gt" and not doc_val > arg:
                    return False
                if op == "$lt" and not doc_val < arg:
                    return False
            elif op == "$regex":
                flags = re.IGNORECASE if ops.get("$options") == "i" else 0
                if doc_val is None or not re.search(arg, str(doc_val), flags):
                    return False
        return True


class MockDatabase:
    """mock database that mimics the Database class"""

    def __init__(self):
        self.users = MockCollection([copy.deepcopy(USER_DOC), copy.deepcopy(OTHER_USER_DOC)])
        self.mood_entries = MockCollection([
            copy.deepcopy(SAMPLE_MOOD),
            copy.deepcopy(SAMPLE_MOOD_2),
            copy.deepcopy(OTHER_USER_MOOD),
        ])
        self.journal_entries = MockCollection([
            copy.deepcopy(SAMPLE_JOURNAL),
            copy.deepcopy(SAMPLE_JOURNAL_2),
            copy.deepcopy(OTHER_USER_JOURNAL),
        ])

    async def connect(self):
        pass

    async def close(self):
        pass


@pytest.fixture
def mock_db():
    """create a fresh mock database for each test"""
    return MockDatabase()


def _user_dict():
    """return user dict as get_current_user would return"""
    doc = USER_DOC.copy()
    doc["id"] = USER_ID
    del doc["_id"]
    return doc


@pytest.fixture
def user_token():
    """jwt access token for the test user"""
    return create_access_token(USER_ID)


@pytest.fixture
def days_ago():
    """build (entry_date, created_at) strings n days before now, utc"""
    now = datetime.now(timezone.utc)

    def _make(n: int) -> tuple[str, str]:
        moment = now - timedelta(days=n)
        return moment.date().isoformat(), moment.isoformat()

    return _make


@pytest_asyncio.fixture
async def client(mock_db):
    """httpx async test client with only the database mocked"""

    async def override_get_db():
        return mock_db

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def user_client(mock_db):
    """client authenticated as the test user"""

    async def override_get_db():
        return mock_db

    async def override_get_current_user():
        return _user_dict()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = override_get_current_user

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
