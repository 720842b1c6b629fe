"""Emotion frequency, vocabulary and category helpers.

Every function here is a pure computation over a list of journal entries
or emotion tags. Ties for the most frequent emotion are resolved in favour
of the emotion seen first in input order.
"""

import re
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from emotisense.analysis.insights import frequency_insight
from emotisense.models import (
    EmotionCount,
    EmotionTag,
    FindingKind,
    JournalEntry,
    Metaphor,
    PatternFinding,
    VocabularyReport,
)


EMOTION_COLORS = {
    "joy": "#fbbf24",
    "happiness": "#fbbf24",
    "sadness": "#3b82f6",
    "anger": "#ef4444",
    "fear": "#8b5cf6",
    "anxiety": "#8b5cf6",
    "surprise": "#f59e0b",
    "disgust": "#10b981",
    "neutral": "#6b7280",
    "uncertain": "#6b7280",
}

EMOTION_CATEGORIES = {
    "positive": ["joy", "happiness", "excitement", "contentment", "gratitude", "love"],
    "negative": ["sadness", "anger", "fear", "anxiety", "frustration", "disappointment"],
    "neutral": ["neutral", "calm", "thoughtful", "curious"],
    "complex": ["bittersweet", "nostalgic", "conflicted", "overwhelmed"],
}

METAPHOR_PATTERNS = [
    re.compile(r"like (a|an) ([^.!?]+)"),
    re.compile(r"feels? like ([^.!?]+)"),
    re.compile(r"as if ([^.!?]+)"),
]

MAX_METAPHORS = 10
TOP_EMOTIONS = 5


class EmotionSummary(BaseModel):
    """Aggregate emotion statistics for a set of entries."""

    counts: dict[str, int] = Field(default_factory=dict)
    vocabulary: list[str] = Field(default_factory=list)
    dominant_emotion: Optional[str] = Field(default=None)
    average_confidence: float = Field(default=0.0, ge=0)
    total_tags: int = Field(default=0, ge=0)

    model_config = {"frozen": True}

    @property
    def has_data(self) -> bool:
        """Whether any emotion was observed."""
        return self.total_tags > 0


def count_emotions(names: Iterable[str]) -> dict[str, int]:
    """Count occurrences of each name, keeping first-seen order."""
    counts: dict[str, int] = {}
    for name in names:
        counts[name] = counts.get(name, 0) + 1
    return counts


def most_frequent(names: Iterable[str]) -> Optional[str]:
    """Return the most frequent name, or None for an empty input.

    Ties go to the name encountered first.
    """
    counts = count_emotions(names)
    if not counts:
        return None
    best_name = None
    best_count = 0
    for name, count in counts.items():
        if count > best_count:
            best_name, best_count = name, count
    return best_name


def aggregate_emotions(entries: list[JournalEntry]) -> EmotionSummary:
    """Aggregate emotion counts, vocabulary and confidence.

    Args:
        entries: Journal entries to aggregate.

    Returns:
        EmotionSummary. An empty input yields zero counts and no
        dominant emotion.
    """
    names = [name for entry in entries for name in entry.emotion_names]
    confidences = [tag.confidence for entry in entries for tag in entry.emotions]

    if not names:
        return EmotionSummary()

    counts = count_emotions(names)
    return EmotionSummary(
        counts=counts,
        vocabulary=list(counts.keys()),
        dominant_emotion=most_frequent(names),
        average_confidence=sum(confidences) / len(confidences),
        total_tags=len(names),
    )


def top_emotions(entries: list[JournalEntry], limit: int = TOP_EMOTIONS) -> list[EmotionCount]:
    """Most frequent emotions, highest count first."""
    counts = aggregate_emotions(entries).counts
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [EmotionCount(emotion=name, count=count) for name, count in ranked[:limit]]


def frequency_finding(entries: list[JournalEntry]) -> Optional[PatternFinding]:
    """Build the 'Most Common Emotions' finding, or None without data."""
    ranked = top_emotions(entries)
    if not ranked:
        return None
    return PatternFinding(
        kind=FindingKind.FREQUENCY,
        title="Most Common Emotions",
        data=ranked,
        insight=frequency_insight(ranked[0]),
    )


def emotion_distribution(entries: list[JournalEntry], limit: int = 6) -> dict[str, int]:
    """First ``limit`` emotions in first-seen order with their counts."""
    counts = aggregate_emotions(entries).counts
    return dict(list(counts.items())[:limit])


def get_emotion_color(emotion: Optional[str]) -> str:
    """Display color for an emotion, neutral gray when unknown."""
    return EMOTION_COLORS.get((emotion or "").lower(), EMOTION_COLORS["neutral"])


def get_emotion_category(emotion: Optional[str]) -> str:
    """Category an emotion belongs to, ``neutral`` when unknown."""
    lowered = (emotion or "").lower()
    for category, emotions in EMOTION_CATEGORIES.items():
        if lowered in emotions:
            return category
    return "neutral"


def group_emotions_by_category(tags: list[EmotionTag]) -> dict[str, list[EmotionTag]]:
    """Split tags into positive, negative, neutral and complex groups."""
    grouped: dict[str, list[EmotionTag]] = {category: [] for category in EMOTION_CATEGORIES}
    for tag in tags:
        grouped[get_emotion_category(tag.name)].append(tag)
    return grouped


def calculate_emotion_intensity(tags: list[EmotionTag]) -> float:
    """Mean confidence of the tags, 0 for none."""
    if not tags:
        return 0.0
    return sum(tag.confidence for tag in tags) / len(tags)


def analyze_vocabulary(entries: list[JournalEntry]) -> VocabularyReport:
    """Describe the emotional vocabulary used across entries.

    Collects the distinct emotions, the dates each emotion appeared on and
    up to ten figurative phrases ("like a ...", "feels like ...",
    "as if ...") from the entry text.
    """
    if not entries:
        return VocabularyReport()

    vocabulary: list[str] = []
    evolution: dict[str, list[str]] = {}
    metaphors: list[Metaphor] = []

    for entry in entries:
        entry_date = entry.date.isoformat() if entry.date else None

        for name in entry.emotion_names:
            if name not in vocabulary:
                vocabulary.append(name)
            if entry_date is not None:
                evolution.setdefault(name, []).append(entry_date)

        text = entry.text.lower()
        for pattern in METAPHOR_PATTERNS:
            for match in pattern.finditer(text):
                start = max(0, match.start() - 50)
                metaphors.append(
                    Metaphor(
                        text=match.group(0),
                        date=entry_date,
                        context=entry.text[start:match.start() + 50],
                    )
                )

    return VocabularyReport(
        vocabulary_size=len(vocabulary),
        unique_emotions=vocabulary,
        emotion_evolution=evolution,
        metaphors=metaphors[:MAX_METAPHORS],
        growth_rate=len(vocabulary) / len(entries) if len(entries) > 1 else 0.0,
    )
