# statistics models — results of the aggregation engine
# all counts default to zero so an empty input serializes to a zeroed result

from datetime import date
from typing import Optional
from pydantic import BaseModel, Field


class TagCount(BaseModel):
    tag: str
    count: int


class SentimentDistribution(BaseModel):
    """per-label entry counts; every label is always present"""
    positive: int = 0
    neutral: int = 0
    negative: int = 0


class JournalStatistics(BaseModel):
    total_entries: int = Field(0, alias="totalEntries")
    total_words: int = Field(0, alias="totalWords")
    average_word_count: float = Field(0.0, alias="averageWordCount")
    sentiment_distribution: SentimentDistribution = Field(
        default_factory=SentimentDistribution, alias="sentimentDistribution",
    )
    average_sentiment_score: float = Field(0.0, alias="averageSentimentScore")
    top_tags: list[TagCount] = Field(default_factory=list, alias="topTags")
    writing_streak: int = Field(0, ge=0, alias="writingStreak")
    entries_this_week: int = Field(0, alias="entriesThisWeek")
    entries_this_month: int = Field(0, alias="entriesThisMonth")
    ai_insights_generated: int = Field(0, alias="aiInsightsGenerated")

    model_config = {"populate_by_name": True}


class MoodStatistics(BaseModel):
    total_entries: int = Field(0, alias="totalEntries")
    average_intensity: float = Field(0.0, alias="averageIntensity")
    dominant_emotion: str = Field("neutral", alias="dominantEmotion")
    emotion_distribution: dict[str, int] = Field(default_factory=dict, alias="emotionDistribution")
    average_by_hour: dict[int, float] = Field(default_factory=dict, alias="averageByHour")
    average_by_day: dict[int, float] = Field(
        default_factory=dict, alias="averageByDay", description="weekday (monday=0) -> mean intensity",
    )
    weekly_trend: float = Field(0.0, alias="weeklyTrend", description="percent change, last 7 days vs the 7 before")
    streak: int = Field(0, ge=0)

    model_config = {"populate_by_name": True}


class MoodTrendPoint(BaseModel):
    """daily mood aggregate for charts"""
    day: date = Field(..., alias="date")
    mood_id: str = Field(..., alias="moodId")
    intensity: float
    count: int

    model_config = {"populate_by_name": True}


class MoodOverview(BaseModel):
    total_entries: int = Field(0, alias="totalEntries")
    average_intensity: float = Field(0.0, alias="averageIntensity")
    most_frequent_mood: Optional[str] = Field(None, alias="mostFrequentMood")
    most_frequent_mood_emoji: Optional[str] = Field(None, alias="mostFrequentMoodEmoji")
    most_frequent_mood_label: Optional[str] = Field(None, alias="mostFrequentMoodLabel")
    entries_by_date: dict[date, int] = Field(default_factory=dict, alias="entriesByDate")

    model_config = {"populate_by_name": True}


class MoodCatalogItem(BaseModel):
    mood_id: str = Field(..., alias="moodId")
    emoji: str
    label: str

    model_config = {"populate_by_name": True}
