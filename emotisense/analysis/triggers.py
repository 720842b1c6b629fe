"""Keyword scanning for situational triggers and physical sensations.

Matching is a case-insensitive substring test against the entry text, with
no stemming or negation handling. "hardship" matches "hard", and
"renewal" matches "new". Entries whose date could not be parsed are still
scanned.
"""

from typing import Optional

from emotisense.analysis.insights import physical_insight, trigger_insight
from emotisense.analysis.temporal import rank_emotion_groups
from emotisense.models import EmotionGroup, FindingKind, JournalEntry, PatternFinding


# Entries needed before keyword scanning runs
MIN_ENTRIES = 2

SITUATIONAL_TERMS = (
    "work", "meeting", "deadline", "project",
    "family", "friend", "relationship", "social",
    "tired", "stressed", "overwhelmed", "busy",
    "change", "new", "different", "unexpected",
    "loud", "bright", "crowded", "quiet",
)

PHYSICAL_TERMS = {
    "head": ("headache", "head", "migraine"),
    "stomach": ("stomach", "nausea", "sick", "gut"),
    "chest": ("chest", "heart", "breathing", "breath"),
    "shoulders": ("shoulders", "neck", "tension", "tight"),
    "energy": ("tired", "exhausted", "energy", "fatigue"),
    "sleep": ("sleep", "insomnia", "rest", "wake"),
}


def scan_situational_triggers(
    entries: list[JournalEntry],
    terms: Optional[tuple[str, ...]] = None,
) -> list[EmotionGroup]:
    """Correlate trigger words with the emotions of entries mentioning them.

    Args:
        entries: Journal entries to scan.
        terms: Trigger vocabulary. Defaults to SITUATIONAL_TERMS.

    Returns:
        Triggers with at least two emotion occurrences, most frequent first.
    """
    vocabulary = dict.fromkeys(term.lower() for term in (terms or SITUATIONAL_TERMS))
    triggers: dict[str, list[str]] = {}

    for entry in entries:
        text = entry.text.lower()
        names = entry.emotion_names
        for term in vocabulary:
            if term in text:
                triggers.setdefault(term, []).extend(names)

    return rank_emotion_groups(triggers)


def scan_physical_correlations(
    entries: list[JournalEntry],
    categories: Optional[dict[str, tuple[str, ...]]] = None,
) -> list[EmotionGroup]:
    """Correlate body-sensation categories with co-occurring emotions.

    A category matches an entry when any of its terms appears in the text.

    Args:
        entries: Journal entries to scan.
        categories: Category to terms mapping. Defaults to PHYSICAL_TERMS.

    Returns:
        Categories with at least two emotion occurrences, most frequent first.
    """
    table = categories or PHYSICAL_TERMS
    correlations: dict[str, list[str]] = {}

    for entry in entries:
        names = entry.emotion_names
        if not names:
            continue
        text = entry.text.lower()
        for category, words in table.items():
            if any(word.lower() in text for word in words):
                correlations.setdefault(category, []).extend(names)

    return rank_emotion_groups(correlations)


def detect_situational_triggers(
    entries: list[JournalEntry],
    terms: Optional[tuple[str, ...]] = None,
) -> list[PatternFinding]:
    """Situational trigger finding, empty below two entries or without matches."""
    if len(entries) < MIN_ENTRIES:
        return []

    groups = scan_situational_triggers(entries, terms)
    if not groups:
        return []

    return [
        PatternFinding(
            kind=FindingKind.SITUATIONAL,
            title="Situational Triggers",
            data=groups,
            insight=trigger_insight(groups),
        )
    ]


def detect_physical_correlations(
    entries: list[JournalEntry],
    categories: Optional[dict[str, tuple[str, ...]]] = None,
) -> list[PatternFinding]:
    """Physical-emotional correlation finding, empty below two entries."""
    if len(entries) < MIN_ENTRIES:
        return []

    groups = scan_physical_correlations(entries, categories)
    if not groups:
        return []

    return [
        PatternFinding(
            kind=FindingKind.PHYSICAL,
            title="Physical-Emotional Correlations",
            data=groups,
            insight=physical_insight(groups),
        )
    ]
