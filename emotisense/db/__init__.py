"""Persistence for EmotiSense."""

from emotisense.db.store import JournalStore

__all__ = ["JournalStore"]
