# async mongodb client for the moodmash api
# uses motor for non-blocking operations

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from moodmash.config import settings

logger = logging.getLogger(__name__)


class Database:
    """async mongodb connection manager, one per process"""

    def __init__(self):
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None

    async def connect(self):
        """establish connection to mongodb and make sure the lookup indexes exist"""
        if self.client is not None:
            return

        logger.info(f"Connecting to MongoDB database: {settings.MONGODB_DATABASE}")
        self.client = AsyncIOMotorClient(settings.MONGODB_URI)
        self.db = self.client[settings.MONGODB_DATABASE]

        # verify connection
        await self.client.admin.command("ping")

        await self.users.create_index("email", unique=True)
        await self.mood_entries.create_index([("user_id", 1), ("created_at", -1)])
        await self.mood_entries.create_index([("user_id", 1), ("entry_date", 1)])
        await self.journal_entries.create_index([("user_id", 1), ("created_at", -1)])
        await self.journal_entries.create_index([("user_id", 1), ("entry_date", 1)])
        logger.info("MongoDB connection established")

    async def close(self):
        """close mongodb connection"""
        if self.client:
            self.client.close()
            self.client = None
            self.db = None
            logger.info("MongoDB connection closed")

    # collection accessors

    @property
    def users(self):
        return self.db["users"]

    @property
    def mood_entries(self):
        return self.db["mood_entries"]

    @property
    def journal_entries(self):
        return self.db["journal_entries"]


# singleton instance
db = Database()


async def get_db() -> Database:
    """dependency injection for database access"""
    return db
