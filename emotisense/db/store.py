"""SQLite journal store for EmotiSense."""

import json
import logging
import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional

from emotisense.models import EmotionTag, JournalEntry

logger = logging.getLogger(__name__)


class JournalStore:
    """SQLite-based store for journal entries.

    One instance is created at startup and passed to whatever needs entries.
    Every operation opens and closes its own connection.
    """

    REQUIRED_TABLES = [
        "entries",
    ]

    # Fields update_entry is allowed to change
    UPDATABLE_FIELDS = ("text", "emotions", "metadata")

    def __init__(self, db_path: Path):
        """Initialize the journal store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS entries (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    user_id TEXT NOT NULL,
                    date TEXT,
                    text TEXT NOT NULL DEFAULT '',
                    emotions TEXT NOT NULL DEFAULT '[]',
                    metadata TEXT NOT NULL DEFAULT '{}',
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_entries_user_date
                ON entries (user_id, date)
            """)
            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> JournalEntry:
        """Convert a row into a JournalEntry, tolerating bad dates."""
        return JournalEntry.from_record({
            "id": row["id"],
            "date": row["date"],
            "text": row["text"],
            "emotions": json.loads(row["emotions"]),
            "metadata": json.loads(row["metadata"]),
            "created_at": row["created_at"],
        })

    @staticmethod
    def _dump_emotions(emotions: list[EmotionTag]) -> str:
        return json.dumps([tag.model_dump() for tag in emotions])

    # ==================== Entries ====================

    def save_entry(self, entry: JournalEntry, user_id: str = "default") -> int:
        """Save a new journal entry.

        Undated entries are stored with a NULL date; they sort last and
        are left out of date-filtered queries.

        Args:
            entry: Entry to save. Its id is ignored.
            user_id: Owner of the entry.

        Returns:
            The ID of the saved entry.
        """
        now = datetime.now()
        created_at = entry.created_at or now

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO entries
                (user_id, date, text, emotions, metadata, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    user_id,
                    entry.date.isoformat() if entry.date else None,
                    entry.text.strip(),
                    self._dump_emotions(entry.emotions),
                    entry.metadata.model_dump_json(),
                    created_at.isoformat(),
                    now.isoformat(),
                ),
            )
            conn.commit()
            entry_id = cursor.lastrowid or 0
            logger.debug("Saved entry %s for user %s", entry_id, user_id)
            return entry_id
        finally:
            conn.close()

    def get_entry(self, entry_id: int, user_id: str = "default") -> Optional[JournalEntry]:
        """Get an entry by ID.

        Args:
            entry_id: Entry ID.
            user_id: Owner of the entry.

        Returns:
            JournalEntry if found, None otherwise.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT id, date, text, emotions, metadata, created_at
                FROM entries
                WHERE id = ? AND user_id = ?
                """,
                (entry_id, user_id),
            )
            row = cursor.fetchone()
            if row:
                return self._row_to_entry(row)
            return None
        finally:
            conn.close()

    def get_entries(
        self,
        user_id: str = "default",
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        limit: Optional[int] = None,
        include_undated: bool = False,
    ) -> list[JournalEntry]:
        """Get a user's most recent entries.

        Args:
            user_id: Owner of the entries.
            from_date: Optional inclusive start date.
            to_date: Optional inclusive end date.
            limit: Optional maximum number of entries.
            include_undated: Keep entries with a NULL date when filtering
                by date range. They sort after every dated entry.

        Returns:
            Entries, newest date first, then newest creation time first.
        """
        query = """
            SELECT id, date, text, emotions, metadata, created_at
            FROM entries
            WHERE user_id = ?
        """
        params: list[Any] = [user_id]

        conditions = []
        if from_date:
            conditions.append("date >= ?")
            params.append(from_date.isoformat())
        if to_date:
            conditions.append("date <= ?")
            params.append(to_date.isoformat())

        if conditions:
            date_range = " AND ".join(conditions)
            if include_undated:
                query += f" AND (({date_range}) OR date IS NULL)"
            else:
                query += f" AND {date_range}"

        query += " ORDER BY date DESC, created_at DESC"

        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return [self._row_to_entry(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def update_entry(
        self,
        entry_id: int,
        updates: dict[str, Any],
        user_id: str = "default",
    ) -> Optional[JournalEntry]:
        """Update whitelisted fields of an entry.

        Only ``text``, ``emotions`` and ``metadata`` can change. Other keys
        are ignored.

        Args:
            entry_id: Entry ID.
            updates: Field values to apply.
            user_id: Owner of the entry.

        Returns:
            The updated entry, or None if it does not exist.

        Raises:
            ValueError: If no updatable field was supplied.
        """
        allowed = {
            field: updates[field]
            for field in self.UPDATABLE_FIELDS
            if updates.get(field) is not None
        }
        if not allowed:
            raise ValueError(
                f"No updatable fields supplied. Allowed: {', '.join(self.UPDATABLE_FIELDS)}"
            )

        existing = self.get_entry(entry_id, user_id)
        if existing is None:
            return None

        # Validate through the model before touching the row
        merged = existing.model_dump()
        merged.update(allowed)
        updated = JournalEntry.from_record(merged)

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                UPDATE entries
                SET text = ?, emotions = ?, metadata = ?, updated_at = ?
                WHERE id = ? AND user_id = ?
                """,
                (
                    updated.text.strip(),
                    self._dump_emotions(updated.emotions),
                    updated.metadata.model_dump_json(),
                    datetime.now().isoformat(),
                    entry_id,
                    user_id,
                ),
            )
            conn.commit()
        finally:
            conn.close()

        return self.get_entry(entry_id, user_id)

    def delete_entry(self, entry_id: int, user_id: str = "default") -> bool:
        """Delete an entry.

        Args:
            entry_id: ID of the entry to delete.
            user_id: Owner of the entry.

        Returns:
            True if an entry was deleted.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "DELETE FROM entries WHERE id = ? AND user_id = ?",
                (entry_id, user_id),
            )
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    def count_entries(self, user_id: str = "default") -> int:
        """Number of entries a user has."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT COUNT(*) as count FROM entries WHERE user_id = ?",
                (user_id,),
            )
            return cursor.fetchone()["count"]
        finally:
            conn.close()

    # ==================== Stats ====================

    def get_stats(self) -> dict:
        """Get database statistics.

        Returns:
            Dictionary with table record counts.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            stats = {}
            for table in self.REQUIRED_TABLES:
                cursor.execute(f"SELECT COUNT(*) as count FROM {table}")
                stats[table] = cursor.fetchone()["count"]
            return stats
        finally:
            conn.close()
