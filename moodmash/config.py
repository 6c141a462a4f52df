# moodmash configuration
# loads env vars for mongodb, jwt, cors and the statistics engine limits

import os
from pathlib import Path
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# load .env from project root
load_dotenv(Path(__file__).parent.parent / ".env")


class Settings(BaseSettings):
    # mongodb
    MONGODB_URI: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    MONGODB_DATABASE: str = os.getenv("MONGODB_DATABASE", "moodmash")

    # jwt auth
    JWT_SECRET: str = os.getenv("JWT_SECRET", "moodmash-dev-secret-change-in-production")
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # cors
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:5173")

    # list endpoints
    DEFAULT_PAGE_LIMIT: int = 20
    MAX_PAGE_LIMIT: int = 100

    # journal validation
    JOURNAL_MAX_LENGTH: int = 20000

    # statistics engine
    STREAK_LOOKBACK_DAYS: int = 365
    TOP_TAGS_LIMIT: int = 10

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
