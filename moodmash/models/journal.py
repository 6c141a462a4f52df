# journal models — entry creation, update, enrichment and response schemas

from datetime import date, datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from moodmash.config import settings
from moodmash.models.common import as_utc
from moodmash.models.mood import TIME_PATTERN
from moodmash.services.sentiment_service import label_for_score

SentimentLabel = Literal["positive", "neutral", "negative"]


class JournalCreate(BaseModel):
    """payload for writing a journal entry"""
    title: Optional[str] = Field(None, max_length=200)
    content: str = Field(..., min_length=1, max_length=settings.JOURNAL_MAX_LENGTH, description="journal entry text")
    mood_id: Optional[str] = Field(None, alias="moodId")
    mood_intensity: Optional[int] = Field(None, ge=1, le=10, alias="moodIntensity")
    activities: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    sleep_quality: Optional[int] = Field(None, ge=1, le=10, alias="sleepQuality")
    energy_level: Optional[int] = Field(None, ge=1, le=10, alias="energyLevel")
    stress_level: Optional[int] = Field(None, ge=1, le=10, alias="stressLevel")
    weather: Optional[str] = None
    location: Optional[str] = None
    entry_date: Optional[date] = Field(None, alias="entryDate", description="defaults to today")
    entry_time: Optional[str] = Field(None, alias="entryTime", pattern=TIME_PATTERN)
    related_mood_entry: Optional[str] = Field(None, alias="relatedMoodEntry", description="id of a mood entry")

    model_config = {"populate_by_name": True}

    @field_validator("content")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("content must not be blank")
        return value


class JournalUpdate(BaseModel):
    """partial update. sentiment fields may be set here by an external analyzer;
    the label must match the score's band. is_ai_generated is only ever set by
    /analyze and cannot be patched."""
    title: Optional[str] = Field(None, max_length=200)
    content: Optional[str] = Field(None, min_length=1, max_length=settings.JOURNAL_MAX_LENGTH)
    mood_id: Optional[str] = Field(None, alias="moodId")
    mood_intensity: Optional[int] = Field(None, ge=1, le=10, alias="moodIntensity")
    activities: Optional[list[str]] = None
    tags: Optional[list[str]] = None
    sleep_quality: Optional[int] = Field(None, ge=1, le=10, alias="sleepQuality")
    energy_level: Optional[int] = Field(None, ge=1, le=10, alias="energyLevel")
    stress_level: Optional[int] = Field(None, ge=1, le=10, alias="stressLevel")
    weather: Optional[str] = None
    location: Optional[str] = None
    entry_date: Optional[date] = Field(None, alias="entryDate")
    entry_time: Optional[str] = Field(None, alias="entryTime", pattern=TIME_PATTERN)
    related_mood_entry: Optional[str] = Field(None, alias="relatedMoodEntry")
    sentiment_score: Optional[float] = Field(None, ge=-1.0, le=1.0, alias="sentimentScore")
    sentiment_label: Optional[SentimentLabel] = Field(None, alias="sentimentLabel")
    ai_summary: Optional[str] = Field(None, alias="aiSummary")
    ai_suggestions: Optional[list[str]] = Field(None, alias="aiSuggestions")

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _label_matches_score(self):
        if self.sentiment_score is not None and self.sentiment_label is not None:
            expected = label_for_score(self.sentiment_score)
            if expected != self.sentiment_label:
                raise ValueError(
                    f"sentimentLabel '{self.sentiment_label}' does not match "
                    f"sentimentScore {self.sentiment_score} (expected '{expected}')"
                )
        return self


class JournalBulkCreate(BaseModel):
    entries: list[JournalCreate] = Field(..., min_length=1, max_length=100)


class JournalEntry(BaseModel):
    """a stored journal entry, as read from journal_entries"""
    id: str
    user_id: str = Field(..., alias="userId")
    title: Optional[str] = None
    content: str
    mood_id: Optional[str] = Field(None, alias="moodId")
    mood_intensity: Optional[int] = Field(None, alias="moodIntensity")
    sentiment_score: Optional[float] = Field(None, alias="sentimentScore")
    sentiment_label: Optional[SentimentLabel] = Field(None, alias="sentimentLabel")
    tags: list[str] = Field(default_factory=list)
    activities: list[str] = Field(default_factory=list)
    is_ai_generated: bool = Field(False, alias="isAiGenerated")
    ai_summary: Optional[str] = Field(None, alias="aiSummary")
    ai_suggestions: list[str] = Field(default_factory=list, alias="aiSuggestions")
    sleep_quality: Optional[int] = Field(None, alias="sleepQuality")
    energy_level: Optional[int] = Field(None, alias="energyLevel")
    stress_level: Optional[int] = Field(None, alias="stressLevel")
    weather: Optional[str] = None
    location: Optional[str] = None
    related_mood_entry: Optional[str] = Field(None, alias="relatedMoodEntry")
    entry_date: date = Field(..., alias="entryDate")
    entry_time: Optional[str] = Field(None, alias="entryTime")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    model_config = {"populate_by_name": True}

    @field_validator("created_at", "updated_at")
    @classmethod
    def _utc(cls, value):
        return as_utc(value)

    @field_validator("tags", "activities", "ai_suggestions", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return value or []

    @field_validator("is_ai_generated", mode="before")
    @classmethod
    def _none_as_false(cls, value):
        return bool(value)


class LinkedMood(BaseModel):
    """the mood entry a journal entry points at"""
    id: str
    mood_id: str = Field(..., alias="moodId")
    intensity: int

    model_config = {"populate_by_name": True}


class JournalWithMood(BaseModel):
    journal: JournalEntry
    mood_entry: Optional[LinkedMood] = Field(None, alias="moodEntry")

    model_config = {"populate_by_name": True}
