"""Journal pattern analysis entry points.

Runs every pattern detector over the same entry list and assembles the
results. All functions are pure: calling them twice with the same input
produces identical output.
"""

from datetime import date, timedelta, tzinfo
from typing import Optional

from emotisense.analysis.emotions import aggregate_emotions, frequency_finding
from emotisense.analysis.streaks import (
    consistency_finding,
    current_streak,
    entry_dates,
    longest_streak,
)
from emotisense.analysis.temporal import detect_temporal_patterns
from emotisense.analysis.triggers import (
    detect_physical_correlations,
    detect_situational_triggers,
)
from emotisense.models import JournalEntry, JournalStats, PatternFinding


def analyze_patterns(
    entries: list[JournalEntry],
    tz: Optional[tzinfo] = None,
    situational_terms: Optional[tuple[str, ...]] = None,
) -> list[PatternFinding]:
    """Run all pattern detectors over a list of entries.

    Args:
        entries: Snapshot of the user's journal entries.
        tz: Zone for time-of-day bucketing. None means the system zone.
        situational_terms: Optional override for the trigger vocabulary.

    Returns:
        Findings in the order frequency, consistency, temporal,
        situational, physical. Detectors without enough data contribute
        nothing.
    """
    entries = list(entries)
    findings: list[PatternFinding] = []

    frequency = frequency_finding(entries)
    if frequency is not None:
        findings.append(frequency)

    consistency = consistency_finding(entries)
    if consistency is not None:
        findings.append(consistency)

    findings.extend(detect_temporal_patterns(entries, tz))
    findings.extend(detect_situational_triggers(entries, situational_terms))
    findings.extend(detect_physical_correlations(entries))

    return findings


def calculate_stats(
    entries: list[JournalEntry],
    today: Optional[date] = None,
) -> JournalStats:
    """Summary statistics for the analytics view.

    Args:
        entries: Journal entries to summarize.
        today: Reference day for the current streak.

    Returns:
        JournalStats. Empty input yields all-zero stats.
    """
    if not entries:
        return JournalStats()

    summary = aggregate_emotions(entries)
    dates = entry_dates(entries)

    return JournalStats(
        total_entries=len(entries),
        avg_emotions_per_entry=round(summary.total_tags / len(entries), 1),
        most_common_emotion=summary.dominant_emotion,
        streak_days=current_streak(dates, today),
        longest_streak=longest_streak(dates),
        vocabulary_size=len(summary.vocabulary),
        average_confidence=round(summary.average_confidence, 2),
    )


def daily_emotion_counts(
    entries: list[JournalEntry],
    days: int = 7,
    today: Optional[date] = None,
) -> dict[date, int]:
    """Number of emotion tags detected on each of the last ``days`` days.

    Returns:
        Mapping ordered oldest to newest, with zero for days without entries.
    """
    end = today or date.today()
    window = [end - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
    counts = {day: 0 for day in window}

    for entry in entries:
        if entry.date in counts:
            counts[entry.date] += len(entry.emotions)

    return counts
