"""Logging streaks and day-to-day emotional consistency."""

from datetime import date, timedelta
from typing import Iterable, Optional

from emotisense.analysis.insights import consistency_insight
from emotisense.models import ConsistencyResult, FindingKind, JournalEntry, PatternFinding


# Distinct dates needed before consistency is reported
MIN_CONSISTENCY_DATES = 3


def entry_dates(entries: list[JournalEntry]) -> list[date]:
    """Distinct entry dates in ascending order, skipping undated entries."""
    return sorted({entry.date for entry in entries if entry.date is not None})


def current_streak(dates: Iterable[date], today: Optional[date] = None) -> int:
    """Count consecutive days with an entry, walking backward from today.

    Args:
        dates: Entry dates, duplicates allowed.
        today: Reference day. Defaults to date.today().

    Returns:
        Streak length. 0 when there is no entry today.
    """
    logged = set(dates)
    day = today or date.today()
    streak = 0
    while day in logged:
        streak += 1
        day -= timedelta(days=1)
    return streak


def longest_streak(dates: Iterable[date]) -> int:
    """Length of the longest run of consecutive logged days."""
    ordered = sorted(set(dates))
    if not ordered:
        return 0

    best = run = 1
    for previous, current in zip(ordered, ordered[1:]):
        if current - previous == timedelta(days=1):
            run += 1
            best = max(best, run)
        else:
            run = 1
    return best


def emotional_consistency(entries: list[JournalEntry]) -> Optional[ConsistencyResult]:
    """Share of adjacent-day transitions whose emotions overlap.

    Emotions of entries on the same day are merged. Adjacent means
    consecutive among the dates present, not necessarily calendar
    neighbours.

    Returns:
        ConsistencyResult, or None with fewer than three distinct dates.
    """
    by_date: dict[date, set[str]] = {}
    for entry in entries:
        if entry.date is None:
            continue
        by_date.setdefault(entry.date, set()).update(entry.emotion_names)

    dates = sorted(by_date)
    if len(dates) < MIN_CONSISTENCY_DATES:
        return None

    consistent = sum(
        1 for previous, current in zip(dates, dates[1:])
        if by_date[previous] & by_date[current]
    )
    return ConsistencyResult(
        consistent_days=consistent,
        total_transitions=len(dates) - 1,
    )


def consistency_finding(entries: list[JournalEntry]) -> Optional[PatternFinding]:
    """Emotional consistency finding when at least one transition overlaps."""
    result = emotional_consistency(entries)
    if result is None or result.consistent_days == 0:
        return None

    return PatternFinding(
        kind=FindingKind.CONSISTENCY,
        title="Emotional Consistency",
        data=result,
        insight=consistency_insight(result),
    )
