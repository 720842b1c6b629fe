"""Property-based tests for situational and physical keyword scanning.

**Feature: journal-patterns**
"""

from datetime import date

from hypothesis import given, settings
from hypothesis import strategies as st

from emotisense.analysis.triggers import (
    SITUATIONAL_TERMS,
    detect_physical_correlations,
    detect_situational_triggers,
    scan_physical_correlations,
    scan_situational_triggers,
)
from emotisense.models import FindingKind, JournalEntry


def make_entry(text, names, entry_date=date(2024, 1, 1)):
    return JournalEntry(
        date=entry_date,
        text=text,
        emotions=[{"name": name, "confidence": 0.6} for name in names],
    )


class TestCaseInsensitiveMatching:
    """
    **Feature: journal-patterns, Property 7: Case-Insensitive Matching**

    *For any* casing of a trigger word, the entry is counted for it.
    """

    @given(st.sampled_from(SITUATIONAL_TERMS), st.booleans())
    @settings(max_examples=40)
    def test_any_casing_matches(self, term: str, upper: bool):
        word = term.upper() if upper else term.title()
        entries = [
            make_entry(f"Today I was {word}.", ["anxiety"]),
            make_entry(f"{word} again", ["anxiety"]),
        ]
        groups = scan_situational_triggers(entries)

        assert term in [group.key for group in groups]

    def test_stressed_uppercase(self):
        entries = [
            make_entry("I am SO STRESSED", ["anxiety"]),
            make_entry("stressed about everything", ["anxiety", "fear"]),
        ]
        findings = detect_situational_triggers(entries)

        assert len(findings) == 1
        top = findings[0].data[0]
        assert top.key == "stressed"
        assert top.dominant_emotion == "anxiety"
        assert findings[0].insight == (
            '"stressed" appears to be a significant situational trigger, '
            'often associated with "anxiety".'
        )

    def test_substring_matches(self):
        entries = [
            make_entry("A season of renewal", ["hope"]),
            make_entry("Renewal feels slow", ["hope"]),
        ]
        keys = [group.key for group in scan_situational_triggers(entries)]
        assert "new" in keys


class TestScanThresholds:
    """
    **Feature: journal-patterns, Property 8: Scan Thresholds**

    *For any* single entry, keyword scanning reports nothing. Triggers with
    fewer than two emotion occurrences are dropped.
    """

    @given(st.text(max_size=200))
    @settings(max_examples=50)
    def test_single_entry(self, text: str):
        entries = [make_entry(text, ["joy", "anxiety"])]
        assert detect_situational_triggers(entries) == []
        assert detect_physical_correlations(entries) == []

    def test_single_occurrence_dropped(self):
        entries = [
            make_entry("work was fine", ["calm"]),
            make_entry("nothing in particular", ["joy"]),
        ]
        assert detect_situational_triggers(entries) == []

    def test_custom_terms(self):
        entries = [
            make_entry("Commute was long", ["frustration"]),
            make_entry("another commute", ["frustration"]),
        ]
        assert detect_situational_triggers(entries) == []
        findings = detect_situational_triggers(entries, terms=("commute",))
        assert findings[0].data[0].key == "commute"

    def test_case_variant_terms_counted_once(self):
        entries = [
            make_entry("Work was busy", ["anxiety"]),
            make_entry("more work", ["anxiety"]),
        ]
        groups = scan_situational_triggers(entries, terms=("work", "Work", "WORK"))

        assert [group.key for group in groups] == ["work"]
        assert groups[0].frequency == 2


class TestPhysicalCorrelations:
    """
    **Feature: journal-patterns, Property 9: Physical Correlations**

    *For any* entries mentioning body sensations, categories are credited
    with the emotions of those entries.
    """

    def test_chest_fear(self):
        entries = [
            make_entry("my chest felt tight", ["fear"]),
            make_entry("heart racing all day", ["fear"]),
        ]
        findings = detect_physical_correlations(entries)

        assert len(findings) == 1
        assert findings[0].kind == FindingKind.PHYSICAL
        groups = {group.key: group for group in findings[0].data}
        assert groups["chest"].dominant_emotion == "fear"
        assert groups["chest"].frequency == 2
        assert findings[0].insight == (
            'chest sensations frequently correlate with "fear" emotional experiences.'
        )

    def test_entries_without_emotions_ignored(self):
        entries = [
            make_entry("headache again", []),
            make_entry("headache", []),
            make_entry("headache", ["sadness"]),
        ]
        assert scan_physical_correlations(entries) == []

    @given(st.lists(st.sampled_from(["joy", "fear", "calm"]), min_size=1, max_size=3))
    @settings(max_examples=30)
    def test_one_match_per_category_per_entry(self, names):
        entries = [make_entry("headache and a migraine in my head", names)] * 2
        groups = {group.key: group for group in scan_physical_correlations(entries)}

        distinct = list(dict.fromkeys(names))
        assert groups["head"].frequency == 2 * len(distinct)


class TestUndatedEntriesScanned:
    """Entries with an unparseable date still count for keyword scanning."""

    def test_bad_date_entries_scanned(self):
        entries = [
            JournalEntry.from_record({
                "date": "not-a-date",
                "text": "Crowded train",
                "emotions": [{"name": "overwhelmed", "confidence": 0.8}],
            }),
            JournalEntry.from_record({
                "date": "also bad",
                "text": "crowded shop",
                "emotions": [{"name": "overwhelmed", "confidence": 0.8}],
            }),
        ]
        assert all(entry.date is None for entry in entries)

        findings = detect_situational_triggers(entries)
        assert findings[0].data[0].key == "crowded"
