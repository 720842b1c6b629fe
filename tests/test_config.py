"""Tests for configuration loading."""

from pathlib import Path

import pytest

from emotisense.config import (
    DEFAULT_ANALYSIS_DAYS,
    DEFAULT_DB_PATH,
    DEFAULT_ENTRY_LIMIT,
    DEFAULT_USER_ID,
    get_analysis_days,
    get_config_path,
    get_db_path,
    get_entry_limit,
    get_situational_terms,
    get_timezone,
    get_user_id,
    load_config,
)


class TestLoadConfig:
    """Missing or broken config files fall back to defaults."""

    def test_missing_file(self, tmp_path: Path):
        assert load_config(tmp_path / "nope.toml") == {}

    def test_broken_file(self, tmp_path: Path):
        path = tmp_path / "config.toml"
        path.write_text("[storage\ndb_path = ")
        assert load_config(path) == {}

    def test_env_override(self, tmp_path: Path, monkeypatch):
        path = tmp_path / "custom.toml"
        path.write_text('[user]\nid = "ana"\n')
        monkeypatch.setenv("EMOTISENSE_CONFIG", str(path))

        assert get_config_path() == path
        assert get_user_id(load_config()) == "ana"


class TestAccessors:
    """Accessors read their section or return the default."""

    def test_defaults(self):
        assert get_db_path({}) == DEFAULT_DB_PATH
        assert get_user_id({}) == DEFAULT_USER_ID
        assert get_timezone({}) is None
        assert get_analysis_days({}) == DEFAULT_ANALYSIS_DAYS
        assert get_entry_limit({}) == DEFAULT_ENTRY_LIMIT
        assert get_situational_terms({}) is None

    def test_values(self, tmp_path: Path):
        config = {
            "storage": {"db_path": str(tmp_path / "j.db")},
            "user": {"id": "ben", "timezone": "Europe/Berlin"},
            "analysis": {"days": 90, "limit": 500, "situational_terms": ["commute", "exam"]},
        }

        assert get_db_path(config) == tmp_path / "j.db"
        assert get_user_id(config) == "ben"
        assert get_timezone(config).zone == "Europe/Berlin"
        assert get_analysis_days(config) == 90
        assert get_entry_limit(config) == 500
        assert get_situational_terms(config) == ("commute", "exam")

    def test_situational_terms_normalized(self):
        config = {"analysis": {"situational_terms": ["work", "Work", " WORK ", "", "Exam"]}}
        assert get_situational_terms(config) == ("work", "exam")

        assert get_situational_terms({"analysis": {"situational_terms": ["  "]}}) is None

    def test_unknown_timezone(self):
        with pytest.raises(ValueError):
            get_timezone({"user": {"timezone": "Nowhere/Special"}})
