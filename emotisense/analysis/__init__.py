"""Pattern analysis over journal entries.

This package provides pure functions that derive statistics and
pattern findings from a list of journal entries:
- Emotion aggregation and vocabulary
- Time-of-day and day-of-week bucketing
- Situational trigger and physical sensation scanning
- Logging streaks and emotional consistency
"""

from emotisense.analysis.analyzer import (
    analyze_patterns,
    calculate_stats,
    daily_emotion_counts,
)
from emotisense.analysis.emotions import (
    EmotionSummary,
    aggregate_emotions,
    analyze_vocabulary,
    emotion_distribution,
    most_frequent,
)
from emotisense.analysis.streaks import (
    current_streak,
    emotional_consistency,
    longest_streak,
)
from emotisense.analysis.temporal import detect_temporal_patterns
from emotisense.analysis.triggers import (
    detect_physical_correlations,
    detect_situational_triggers,
)

__all__ = [
    "analyze_patterns",
    "calculate_stats",
    "daily_emotion_counts",
    "EmotionSummary",
    "aggregate_emotions",
    "analyze_vocabulary",
    "emotion_distribution",
    "most_frequent",
    "current_streak",
    "longest_streak",
    "emotional_consistency",
    "detect_temporal_patterns",
    "detect_situational_triggers",
    "detect_physical_correlations",
]
