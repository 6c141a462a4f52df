# moodmash backend api
# fastapi app with async mongodb, jwt auth, and the mood/journal statistics engine

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from moodmash.config import settings
from moodmash.services.db import db
from moodmash.routers import auth, moods, journals

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """startup: connect to mongodb. shutdown: close connection."""
    logger.info("Starting MoodMash backend...")
    await db.connect()
    logger.info("MoodMash backend ready")
    yield
    logger.info("Shutting down MoodMash backend...")
    await db.close()


app = FastAPI(
    title="MoodMash API",
    description="Backend API for MoodMash: mood logging, journaling and statistics",
    version="0.1.0",
    lifespan=lifespan,
)

# cors — allow frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL, "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# register routers
app.include_router(auth.router)
app.include_router(moods.router)
app.include_router(journals.router)


@app.get("/health")
async def health_check():
    """basic health check endpoint"""
    return {"status": "ok", "service": "moodmash-api"}
