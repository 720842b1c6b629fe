"""Data models for EmotiSense."""

from emotisense.models.entry import EmotionMetadata, EmotionTag, JournalEntry
from emotisense.models.detection import EmotionDetection
from emotisense.models.finding import (
    ConsistencyResult,
    EmotionCount,
    EmotionGroup,
    FindingKind,
    JournalStats,
    Metaphor,
    PatternFinding,
    VocabularyReport,
)

__all__ = [
    "EmotionTag",
    "EmotionMetadata",
    "JournalEntry",
    "EmotionDetection",
    "FindingKind",
    "EmotionCount",
    "EmotionGroup",
    "ConsistencyResult",
    "PatternFinding",
    "JournalStats",
    "Metaphor",
    "VocabularyReport",
]
