"""Time-of-day and day-of-week emotion bucketing."""

from datetime import datetime, tzinfo
from typing import Optional

from emotisense.analysis.emotions import most_frequent
from emotisense.analysis.insights import day_of_week_insight, time_of_day_insight
from emotisense.models import EmotionGroup, FindingKind, JournalEntry, PatternFinding


# Entries needed before temporal patterns are reported
MIN_ENTRIES = 3
# Emotion occurrences a bucket needs to count as a pattern
MIN_BUCKET_SUPPORT = 2

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def get_time_slot(hour: int) -> str:
    """Map an hour (0-23) to night, morning, afternoon or evening."""
    if hour < 6:
        return "night"
    if hour < 12:
        return "morning"
    if hour < 18:
        return "afternoon"
    return "evening"


def get_day_name(moment: datetime) -> str:
    """Weekday name of a datetime."""
    return DAY_NAMES[moment.weekday()]


def _local_time(moment: datetime, tz: Optional[tzinfo]) -> datetime:
    """Wall-clock time used for bucketing.

    Naive timestamps are already local. Aware ones are converted to ``tz``,
    or to the system zone when ``tz`` is None.
    """
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(tz)


def rank_emotion_groups(groups: dict[str, list[str]]) -> list[EmotionGroup]:
    """Turn accumulated emotion lists into ranked groups.

    Groups with fewer than two occurrences are dropped. The rest are sorted
    by occurrence count, highest first; equal counts keep first-seen order.

    Args:
        groups: Mapping of group key to every emotion occurrence in it.

    Returns:
        Ranked list of EmotionGroup.
    """
    ranked = [
        EmotionGroup(
            key=key,
            emotions=list(dict.fromkeys(emotions)),
            frequency=len(emotions),
            dominant_emotion=most_frequent(emotions),
        )
        for key, emotions in groups.items()
        if len(emotions) >= MIN_BUCKET_SUPPORT
    ]
    return sorted(ranked, key=lambda group: group.frequency, reverse=True)


def bucket_emotions(
    entries: list[JournalEntry],
    tz: Optional[tzinfo] = None,
) -> tuple[dict[str, list[str]], dict[str, list[str]]]:
    """Accumulate emotions per time slot and per weekday.

    Entries without a valid date are skipped, even if they have a
    creation timestamp.

    Returns:
        Tuple of (time_slot_emotions, day_emotions).
    """
    by_time: dict[str, list[str]] = {}
    by_day: dict[str, list[str]] = {}

    for entry in entries:
        if entry.date is None:
            continue
        moment = _local_time(entry.timestamp, tz)

        names = entry.emotion_names
        by_time.setdefault(get_time_slot(moment.hour), []).extend(names)
        by_day.setdefault(get_day_name(moment), []).extend(names)

    return by_time, by_day


def detect_temporal_patterns(
    entries: list[JournalEntry],
    tz: Optional[tzinfo] = None,
) -> list[PatternFinding]:
    """Detect time-of-day and day-of-week emotion patterns.

    Args:
        entries: Journal entries to analyze.
        tz: Zone for timezone-aware timestamps. None means the system zone.

    Returns:
        Up to two findings (temporal_time, temporal_day). Empty when fewer
        than three entries are supplied.
    """
    if len(entries) < MIN_ENTRIES:
        return []

    by_time, by_day = bucket_emotions(entries, tz)
    findings = []

    time_groups = rank_emotion_groups(by_time)
    if time_groups:
        findings.append(
            PatternFinding(
                kind=FindingKind.TEMPORAL_TIME,
                title="Time of Day Patterns",
                data=time_groups,
                insight=time_of_day_insight(time_groups),
            )
        )

    day_groups = rank_emotion_groups(by_day)
    if day_groups:
        findings.append(
            PatternFinding(
                kind=FindingKind.TEMPORAL_DAY,
                title="Day of Week Patterns",
                data=day_groups,
                insight=day_of_week_insight(day_groups),
            )
        )

    return findings
