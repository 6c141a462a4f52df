# insight lexicon — mood catalog and keyword sentiment tables
# kept as versioned data so the heuristics can change without touching
# the statistics or enrichment code that reads them

from dataclasses import dataclass, field


@dataclass(frozen=True)
class MoodInfo:
    emoji: str
    label: str


@dataclass(frozen=True)
class MoodCatalog:
    """closed set of mood categories with their display glyph and label.
    lookups are case-sensitive; unknown keys fall back to neutral's glyph
    and the `unknown_label`."""

    version: str
    moods: dict[str, MoodInfo]
    fallback_key: str = "neutral"
    unknown_label: str = "Unknown"

    def emoji(self, mood_id: str) -> str:
        info = self.moods.get(mood_id)
        if info is None:
            return self.moods[self.fallback_key].emoji
        return info.emoji

    def label(self, mood_id: str) -> str:
        info = self.moods.get(mood_id)
        if info is None:
            return self.unknown_label
        return info.label

    def keys(self) -> list[str]:
        return list(self.moods)


@dataclass(frozen=True)
class SentimentLexicon:
    """keyword lists for the placeholder sentiment heuristic.
    a score above `threshold` is positive, below -`threshold` negative."""

    version: str
    positive: tuple[str, ...]
    negative: tuple[str, ...]
    threshold: float = 0.2


@dataclass(frozen=True)
class SummaryTemplate:
    version: str
    prefix: str
    suggestions: tuple[str, ...] = field(default_factory=tuple)


MOOD_CATALOG = MoodCatalog(
    version="2024.1",
    moods={
        "happy": MoodInfo("😊", "Happy"),
        "sad": MoodInfo("😢", "Sad"),
        "angry": MoodInfo("😠", "Angry"),
        "anxious": MoodInfo("😰", "Anxious"),
        "calm": MoodInfo("😌", "Calm"),
        "excited": MoodInfo("🤩", "Excited"),
        "tired": MoodInfo("😴", "Tired"),
        "neutral": MoodInfo("😐", "Neutral"),
    },
)

SENTIMENT_LEXICON = SentimentLexicon(
    version="2024.1",
    positive=(
        "happy", "good", "great", "excellent", "amazing",
        "wonderful", "joy", "love", "excited", "grateful",
    ),
    negative=(
        "sad", "bad", "terrible", "awful", "angry",
        "frustrated", "anxious", "stressed", "worried", "depressed",
    ),
)

SUMMARY_TEMPLATE = SummaryTemplate(
    version="2024.1",
    prefix="Journal entry about: ",
    suggestions=(
        "Consider writing about what made you feel this way",
        "What could you do to maintain this feeling?",
        "Think about how you might share this experience with others",
    ),
)
