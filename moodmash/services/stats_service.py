# statistics engine — pure aggregation over one user's mood and journal entries
# no i/o and no shared state: every function takes its whole input (including
# "now" where the result depends on it) and returns a freshly built result

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Sequence

from moodmash.config import settings
from moodmash.insights.lexicon import MOOD_CATALOG, MoodCatalog
from moodmash.models.common import as_utc
from moodmash.models.journal import JournalEntry
from moodmash.models.mood import MoodEntry
from moodmash.models.stats import (
    JournalStatistics,
    MoodOverview,
    MoodStatistics,
    MoodTrendPoint,
    SentimentDistribution,
    TagCount,
)

_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)
_LATEST = datetime.max.replace(tzinfo=timezone.utc)


def _resolve_now(now: Optional[datetime]) -> datetime:
    return as_utc(now) if now is not None else datetime.now(timezone.utc)


def _within_dates(entry_date: date, start_date: Optional[date], end_date: Optional[date]) -> bool:
    if start_date is not None and entry_date < start_date:
        return False
    if end_date is not None and entry_date > end_date:
        return False
    return True


# mood helpers

def calculate_mood_average(entries: Sequence[MoodEntry]) -> float:
    """mean intensity rounded half-up to one decimal; 0 for no entries"""
    if not entries:
        return 0.0
    mean = sum(entry.intensity for entry in entries) / len(entries)
    return float(Decimal(str(mean)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def get_mood_emoji(mood_id: str, catalog: MoodCatalog = MOOD_CATALOG) -> str:
    return catalog.emoji(mood_id)


def get_mood_label(mood_id: str, catalog: MoodCatalog = MOOD_CATALOG) -> str:
    return catalog.label(mood_id)


def filter_moods_by_date_range(
    entries: Sequence[MoodEntry], start: datetime, end: datetime,
) -> list[MoodEntry]:
    """entries with start <= created_at <= end, in their original order"""
    start, end = as_utc(start), as_utc(end)
    return [entry for entry in entries if start <= entry.created_at <= end]


def group_moods_by_date(entries: Iterable[MoodEntry]) -> dict[date, list[MoodEntry]]:
    """bucket entries by the calendar day of created_at"""
    groups: dict[date, list[MoodEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.created_at.date(), []).append(entry)
    return groups


def get_most_frequent_mood(entries: Iterable[MoodEntry]) -> Optional[str]:
    """most logged mood_id. on ties the mood whose running count first reached
    the winning total keeps it, e.g. [happy, calm, calm, happy] -> calm."""
    counts: dict[str, int] = {}
    best: Optional[str] = None
    best_count = 0
    for entry in entries:
        counts[entry.mood_id] = counts.get(entry.mood_id, 0) + 1
        if counts[entry.mood_id] > best_count:
            best = entry.mood_id
            best_count = counts[entry.mood_id]
    return best


def calculate_streak(
    entry_dates: Iterable[date],
    today: date,
    lookback_days: int = settings.STREAK_LOOKBACK_DAYS,
) -> int:
    """consecutive days with at least one entry, counting back from today.
    an empty today does not end the streak; any earlier empty day does."""
    days = set(entry_dates)
    streak = 0
    for offset in range(lookback_days):
        day = today - timedelta(days=offset)
        if day in days:
            streak += 1
        elif day != today:
            break
    return streak


def summarize_moods(
    entries: Sequence[MoodEntry],
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    catalog: MoodCatalog = MOOD_CATALOG,
) -> MoodOverview:
    """dashboard overview built from the mood helpers above"""
    if start is not None or end is not None:
        entries = filter_moods_by_date_range(entries, start or _EARLIEST, end or _LATEST)

    most_frequent = get_most_frequent_mood(entries)
    return MoodOverview(
        totalEntries=len(entries),
        averageIntensity=calculate_mood_average(entries),
        mostFrequentMood=most_frequent,
        mostFrequentMoodEmoji=get_mood_emoji(most_frequent, catalog) if most_frequent else None,
        mostFrequentMoodLabel=get_mood_label(most_frequent, catalog) if most_frequent else None,
        entriesByDate={day: len(bucket) for day, bucket in group_moods_by_date(entries).items()},
    )


def get_mood_statistics(
    entries: Sequence[MoodEntry],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    now: Optional[datetime] = None,
) -> MoodStatistics:
    now = _resolve_now(now)
    entries = [e for e in entries if _within_dates(e.entry_date, start_date, end_date)]
    if not entries:
        return MoodStatistics()

    distribution: dict[str, int] = {}
    by_hour: dict[int, list[int]] = {}
    by_day: dict[int, list[int]] = {}
    total_intensity = 0

    for entry in entries:
        total_intensity += entry.intensity
        distribution[entry.mood_id] = distribution.get(entry.mood_id, 0) + 1
        by_hour.setdefault(entry.created_at.hour, []).append(entry.intensity)
        by_day.setdefault(entry.created_at.weekday(), []).append(entry.intensity)

    # weekly trend: last 7 days against the 7 days before
    last_week_start = now - timedelta(days=7)
    prev_week_start = last_week_start - timedelta(days=7)
    last_week = [e.intensity for e in entries if e.created_at >= last_week_start]
    prev_week = [e.intensity for e in entries if prev_week_start <= e.created_at < last_week_start]
    last_avg = sum(last_week) / len(last_week) if last_week else 0
    prev_avg = sum(prev_week) / len(prev_week) if prev_week else 0
    weekly_trend = (last_avg - prev_avg) / prev_avg * 100 if prev_avg > 0 else 0.0

    return MoodStatistics(
        totalEntries=len(entries),
        averageIntensity=total_intensity / len(entries),
        dominantEmotion=get_most_frequent_mood(entries),
        emotionDistribution=distribution,
        averageByHour={hour: sum(v) / len(v) for hour, v in by_hour.items()},
        averageByDay={day: sum(v) / len(v) for day, v in by_day.items()},
        weeklyTrend=weekly_trend,
        streak=calculate_streak((e.entry_date for e in entries), now.date()),
    )


def get_mood_trend(entries: Iterable[MoodEntry]) -> list[MoodTrendPoint]:
    """one point per entry_date with the running mean intensity; the mood of the
    first entry seen that day labels the point"""
    points: dict[date, MoodTrendPoint] = {}
    for entry in entries:
        point = points.get(entry.entry_date)
        if point is None:
            points[entry.entry_date] = MoodTrendPoint(
                date=entry.entry_date, moodId=entry.mood_id, intensity=entry.intensity, count=1,
            )
            continue
        point.count += 1
        point.intensity = (point.intensity * (point.count - 1) + entry.intensity) / point.count
    return [points[day] for day in sorted(points)]


# journal statistics

def get_journal_statistics(
    entries: Sequence[JournalEntry],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    now: Optional[datetime] = None,
) -> JournalStatistics:
    """composite journal statistics.

    - entries are first narrowed to start_date..end_date (inclusive, on entry_date)
    - no entries left gives the zeroed result
    - words are whitespace-separated tokens of the content
    - only labelled entries count toward the sentiment distribution, and only
      their scores are summed
    - averages divide by the total number of entries, scored or not
    - entries this week/month are those created in the trailing 7/30 days
    - top tags are the most used tags, ties kept in first-use order
    """
    now = _resolve_now(now)
    entries = [e for e in entries if _within_dates(e.entry_date, start_date, end_date)]
    if not entries:
        return JournalStatistics()

    distribution = SentimentDistribution()
    tag_counts: dict[str, int] = {}
    total_words = 0
    score_sum = 0.0
    ai_insights = 0

    for entry in entries:
        total_words += len(entry.content.split())

        if entry.sentiment_label:
            setattr(distribution, entry.sentiment_label, getattr(distribution, entry.sentiment_label) + 1)
            if entry.sentiment_score:
                score_sum += entry.sentiment_score

        for tag in entry.tags:
            tag_counts[tag] = tag_counts.get(tag, 0) + 1

        if entry.is_ai_generated:
            ai_insights += 1

    week_ago = now - timedelta(days=7)
    month_ago = now - timedelta(days=30)
    top_tags = sorted(tag_counts.items(), key=lambda item: -item[1])[: settings.TOP_TAGS_LIMIT]

    return JournalStatistics(
        totalEntries=len(entries),
        totalWords=total_words,
        averageWordCount=total_words / len(entries),
        sentimentDistribution=distribution,
        averageSentimentScore=score_sum / len(entries),
        topTags=[TagCount(tag=tag, count=count) for tag, count in top_tags],
        writingStreak=calculate_streak((e.entry_date for e in entries), now.date()),
        entriesThisWeek=sum(1 for e in entries if e.created_at >= week_ago),
        entriesThisMonth=sum(1 for e in entries if e.created_at >= month_ago),
        aiInsightsGenerated=ai_insights,
    )
