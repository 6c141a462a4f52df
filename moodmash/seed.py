# seed script — creates a demo user with a few weeks of mood and journal history
# run once: python -m moodmash.seed

import asyncio
import logging
import os
import random
from datetime import datetime, timedelta, timezone

from moodmash.insights.lexicon import MOOD_CATALOG
from moodmash.services.db import db
from moodmash.services.auth_service import hash_password
from moodmash.services.sentiment_service import build_enrichment

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

# seed password from env
DEFAULT_PASSWORD = os.getenv("SEED_PASSWORD", "moodmash123")
DEMO_EMAIL = "demo@moodmash.app"
DEMO_DAYS = 21

JOURNAL_SNIPPETS = [
    ("Morning run", "Went for a run before work. Felt great and grateful for the sunshine.", ["exercise", "outdoors"]),
    ("Deadline", "Stressed about the release. Worried we will not finish on time.", ["work"]),
    ("Dinner with friends", "Amazing evening with old friends, lots of laughing.", ["social", "friends"]),
    ("Slow day", "Nothing much happened. Read a bit and went to bed early.", ["rest"]),
    ("Rough night", "Slept badly and woke up anxious. Tried the breathing exercise.", ["sleep", "anxiety"]),
]


async def seed():
    """create the demo user and its entries, skips if the user already exists"""
    await db.connect()

    if await db.users.find_one({"email": DEMO_EMAIL}):
        logger.info(f"Demo user already exists: {DEMO_EMAIL}")
        await db.close()
        return

    now = datetime.now(timezone.utc)
    result = await db.users.insert_one({
        "email": DEMO_EMAIL,
        "hashed_password": hash_password(DEFAULT_PASSWORD),
        "name": "Demo User",
        "created_at": (now - timedelta(days=DEMO_DAYS)).isoformat(),
    })
    user_id = str(result.inserted_id)
    logger.info(f"Created demo user (id: {user_id})")

    rng = random.Random(42)
    moods, journals = [], []
    for offset in range(DEMO_DAYS, -1, -1):
        day = now - timedelta(days=offset)
        for _ in range(rng.randint(1, 3)):
            logged_at = day.replace(hour=rng.randint(7, 22), minute=rng.randint(0, 59))
            mood_id = rng.choice(MOOD_CATALOG.keys())
            moods.append({
                "user_id": user_id,
                "mood_id": mood_id,
                "mood_label": MOOD_CATALOG.label(mood_id),
                "intensity": rng.randint(1, 10),
                "note": None,
                "tags": [],
                "activities": [],
                "entry_date": logged_at.date().isoformat(),
                "entry_time": logged_at.strftime("%H:%M"),
                "created_at": logged_at.isoformat(),
                "updated_at": logged_at.isoformat(),
            })

        # journal on most days so the streak is visible
        if rng.random() < 0.8:
            title, content, tags = rng.choice(JOURNAL_SNIPPETS)
            written_at = day.replace(hour=21, minute=0)
            doc = {
                "user_id": user_id,
                "title": title,
                "content": content,
                "tags": tags,
                "activities": [],
                "entry_date": written_at.date().isoformat(),
                "entry_time": "21:00",
                "created_at": written_at.isoformat(),
                "updated_at": written_at.isoformat(),
                "is_ai_generated": False,
                "ai_suggestions": [],
            }
            if rng.random() < 0.5:
                doc.update(build_enrichment(content))
            journals.append(doc)

    await db.mood_entries.insert_many(moods)
    await db.journal_entries.insert_many(journals)
    logger.info(f"Inserted {len(moods)} mood entries and {len(journals)} journal entries")

    logger.info("Seed complete!")
    await db.close()


if __name__ == "__main__":
    asyncio.run(seed())
