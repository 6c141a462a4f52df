# mood models — mood log creation, update and stored entry schemas

from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from moodmash.models.common import as_utc

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class MoodCreate(BaseModel):
    """payload for logging a mood"""
    mood_id: str = Field(..., min_length=1, alias="moodId", description="mood category key, e.g. 'happy'")
    mood_label: Optional[str] = Field(None, alias="moodLabel")
    intensity: int = Field(..., ge=1, le=10, description="intensity 1-10")
    note: Optional[str] = Field(None, max_length=2000)
    tags: list[str] = Field(default_factory=list)
    activities: list[str] = Field(default_factory=list)
    sleep_quality: Optional[int] = Field(None, ge=1, le=10, alias="sleepQuality")
    energy_level: Optional[int] = Field(None, ge=1, le=10, alias="energyLevel")
    stress_level: Optional[int] = Field(None, ge=1, le=10, alias="stressLevel")
    weather: Optional[str] = None
    location: Optional[str] = None
    entry_date: Optional[date] = Field(None, alias="entryDate", description="defaults to today")
    entry_time: Optional[str] = Field(None, alias="entryTime", pattern=TIME_PATTERN)

    model_config = {"populate_by_name": True}


class MoodUpdate(BaseModel):
    """partial update — only fields that are sent are written"""
    mood_id: Optional[str] = Field(None, min_length=1, alias="moodId")
    mood_label: Optional[str] = Field(None, alias="moodLabel")
    intensity: Optional[int] = Field(None, ge=1, le=10)
    note: Optional[str] = Field(None, max_length=2000)
    tags: Optional[list[str]] = None
    activities: Optional[list[str]] = None
    sleep_quality: Optional[int] = Field(None, ge=1, le=10, alias="sleepQuality")
    energy_level: Optional[int] = Field(None, ge=1, le=10, alias="energyLevel")
    stress_level: Optional[int] = Field(None, ge=1, le=10, alias="stressLevel")
    weather: Optional[str] = None
    location: Optional[str] = None
    entry_date: Optional[date] = Field(None, alias="entryDate")
    entry_time: Optional[str] = Field(None, alias="entryTime", pattern=TIME_PATTERN)

    model_config = {"populate_by_name": True}


class MoodBulkCreate(BaseModel):
    entries: list[MoodCreate] = Field(..., min_length=1, max_length=100)


class MoodEntry(BaseModel):
    """a stored mood log, as read from mood_entries"""
    id: str
    user_id: str = Field(..., alias="userId")
    mood_id: str = Field(..., alias="moodId")
    mood_label: Optional[str] = Field(None, alias="moodLabel")
    intensity: int = Field(..., ge=1, le=10)
    note: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    activities: list[str] = Field(default_factory=list)
    sleep_quality: Optional[int] = Field(None, alias="sleepQuality")
    energy_level: Optional[int] = Field(None, alias="energyLevel")
    stress_level: Optional[int] = Field(None, alias="stressLevel")
    weather: Optional[str] = None
    location: Optional[str] = None
    entry_date: date = Field(..., alias="entryDate")
    entry_time: Optional[str] = Field(None, alias="entryTime")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    model_config = {"populate_by_name": True}

    @field_validator("created_at", "updated_at")
    @classmethod
    def _utc(cls, value):
        return as_utc(value)

    @field_validator("tags", "activities", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return value or []
