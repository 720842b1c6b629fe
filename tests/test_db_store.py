"""Property-based tests for the journal store.

**Feature: journal-patterns**
"""

import sqlite3
import tempfile
from datetime import date, datetime, timedelta
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from emotisense.db.store import JournalStore
from emotisense.models import JournalEntry


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "test.db"
        yield JournalStore(db_path)


def make_entry(entry_date=date(2024, 1, 1), text="A quiet day", names=("calm",), created_at=None):
    return JournalEntry(
        date=entry_date,
        text=text,
        created_at=created_at,
        emotions=[{"name": name, "confidence": 0.6, "indicators": ["quiet"]} for name in names],
        metadata={"intensity": 3, "complexity": "simple", "sensory_elements": ["quiet"]},
    )


class TestDatabaseSchemaCompleteness:
    """
    **Feature: journal-patterns, Property 15: Database Schema Completeness**

    *For any* fresh database, all required tables should exist.
    """

    def test_schema_completeness(self, temp_db: JournalStore):
        """Test that all required tables exist in a fresh database."""
        tables = temp_db.get_tables()

        for table in JournalStore.REQUIRED_TABLES:
            assert table in tables, f"Required table '{table}' is missing"

    @given(st.integers(min_value=1, max_value=5))
    @settings(max_examples=10)
    def test_schema_completeness_multiple_instances(self, num_instances: int):
        """
        *For any* number of JournalStore instances on the same file, the
        schema is created once and all required tables exist.
        """
        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = Path(tmpdir) / "nested" / "test.db"
            for _ in range(num_instances):
                store = JournalStore(db_path)

            for table in JournalStore.REQUIRED_TABLES:
                assert table in store.get_tables()


class TestEntryRoundTrip:
    """
    **Feature: journal-patterns, Property 16: Entry Persistence**

    *For any* saved entry, reading it back returns the same content.
    """

    @given(
        text=st.text(
            alphabet=st.characters(blacklist_categories=("Cs", "Cc")),
            max_size=200,
        ).filter(lambda x: x.strip() == x),
        names=st.lists(
            st.text(
                alphabet=st.characters(whitelist_categories=("Ll",)),
                min_size=1,
                max_size=12,
            ),
            max_size=4,
            unique=True,
        ),
    )
    @settings(max_examples=50)
    def test_save_and_get(self, text: str, names: list[str]):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = JournalStore(Path(tmpdir) / "test.db")
            entry_id = store.save_entry(make_entry(text=text, names=names), user_id="ana")

            loaded = store.get_entry(entry_id, user_id="ana")
            assert loaded is not None
            assert loaded.id == entry_id
            assert loaded.text == text
            assert loaded.emotion_names == names
            assert loaded.date == date(2024, 1, 1)
            assert loaded.metadata.intensity == 3
            assert loaded.created_at is not None

    def test_other_user_cannot_read(self, temp_db: JournalStore):
        entry_id = temp_db.save_entry(make_entry(), user_id="ana")
        assert temp_db.get_entry(entry_id, user_id="ben") is None
        assert temp_db.get_entry(entry_id + 100, user_id="ana") is None

    def test_undated_entry_stays_undated(self, temp_db: JournalStore):
        entry = make_entry(entry_date=None, created_at=datetime(2024, 1, 5, 9))
        entry_id = temp_db.save_entry(entry)

        assert temp_db.get_entry(entry_id).date is None

    def test_malformed_stored_date_loads_as_none(self, temp_db: JournalStore):
        entry_id = temp_db.save_entry(make_entry())
        conn = sqlite3.connect(temp_db.db_path)
        try:
            conn.execute("UPDATE entries SET date = 'garbage' WHERE id = ?", (entry_id,))
            conn.commit()
        finally:
            conn.close()

        loaded = temp_db.get_entry(entry_id)
        assert loaded.date is None
        assert loaded.emotion_names == ["calm"]


class TestEntryQueries:
    """Queries filter by owner and date range, newest first."""

    def test_ordering_and_filters(self, temp_db: JournalStore):
        base = date(2024, 1, 10)
        for offset in range(5):
            temp_db.save_entry(make_entry(entry_date=base - timedelta(days=offset)))
        temp_db.save_entry(make_entry(entry_date=base), user_id="someone-else")

        entries = temp_db.get_entries()
        assert [entry.date for entry in entries] == [
            base - timedelta(days=offset) for offset in range(5)
        ]

        windowed = temp_db.get_entries(
            from_date=base - timedelta(days=3),
            to_date=base - timedelta(days=1),
        )
        assert len(windowed) == 3

        assert len(temp_db.get_entries(limit=2)) == 2
        assert temp_db.count_entries() == 5
        assert temp_db.get_stats() == {"entries": 6}

    def test_same_day_newest_first(self, temp_db: JournalStore):
        day = date(2024, 1, 1)
        temp_db.save_entry(make_entry(entry_date=day, text="first", created_at=datetime(2024, 1, 1, 8)))
        temp_db.save_entry(make_entry(entry_date=day, text="second", created_at=datetime(2024, 1, 1, 20)))

        assert [entry.text for entry in temp_db.get_entries()] == ["second", "first"]


class TestEntryUpdate:
    """
    **Feature: journal-patterns, Property 17: Update Whitelist**

    *For any* update, only text, emotions and metadata change.
    """

    def test_update_text_and_emotions(self, temp_db: JournalStore):
        entry_id = temp_db.save_entry(make_entry())

        updated = temp_db.update_entry(
            entry_id,
            {
                "text": "Changed my mind",
                "emotions": [{"name": "joy", "confidence": 0.9}],
                "date": "1999-01-01",
            },
        )

        assert updated.text == "Changed my mind"
        assert updated.emotion_names == ["joy"]
        assert updated.date == date(2024, 1, 1)

    def test_no_allowed_fields(self, temp_db: JournalStore):
        entry_id = temp_db.save_entry(make_entry())
        with pytest.raises(ValueError):
            temp_db.update_entry(entry_id, {"date": "2024-02-02", "user_id": "x"})

    def test_missing_entry(self, temp_db: JournalStore):
        assert temp_db.update_entry(42, {"text": "nope"}) is None


class TestEntryDelete:
    """Deleting removes the entry and reports whether anything was removed."""

    def test_delete(self, temp_db: JournalStore):
        entry_id = temp_db.save_entry(make_entry())

        assert temp_db.delete_entry(entry_id, user_id="other") is False
        assert temp_db.delete_entry(entry_id) is True
        assert temp_db.get_entry(entry_id) is None
        assert temp_db.delete_entry(entry_id) is False


class TestUndatedEntriesInRange:
    """Undated entries can be kept in date-filtered queries, sorted last."""

    def test_include_undated_with_date_range(self, temp_db: JournalStore):
        temp_db.save_entry(make_entry(entry_date=date(2024, 1, 10), text="dated"))
        temp_db.save_entry(make_entry(entry_date=date(2023, 1, 1), text="too old"))
        temp_db.save_entry(make_entry(entry_date=None, text="undated"))

        window = {"from_date": date(2024, 1, 1), "to_date": date(2024, 1, 31)}
        assert [e.text for e in temp_db.get_entries(**window)] == ["dated"]

        texts = [e.text for e in temp_db.get_entries(include_undated=True, **window)]
        assert texts == ["dated", "undated"]
