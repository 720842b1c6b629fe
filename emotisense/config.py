"""Configuration loading for EmotiSense.

Settings live in a TOML file at ``~/.config/emotisense/config.toml``
(override with the ``EMOTISENSE_CONFIG`` environment variable). A missing
or unreadable file means defaults are used.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import pytz
import toml

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "emotisense"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.toml"
DEFAULT_DB_PATH = CONFIG_DIR / "emotisense.db"

DEFAULT_USER_ID = "default"
DEFAULT_ANALYSIS_DAYS = 30
DEFAULT_ENTRY_LIMIT = 100


def get_config_path() -> Path:
    """Path of the config file, honouring EMOTISENSE_CONFIG."""
    override = os.environ.get("EMOTISENSE_CONFIG")
    return Path(override).expanduser() if override else DEFAULT_CONFIG_PATH


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration from TOML.

    Args:
        config_path: Optional explicit path. Uses get_config_path() if None.

    Returns:
        Parsed configuration, or an empty dict if the file is missing or
        cannot be parsed.
    """
    path = config_path or get_config_path()

    if not path.exists():
        return {}

    try:
        return toml.load(path)
    except (toml.TomlDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return {}


def get_db_path(config: dict) -> Path:
    """Database path from config, defaulting next to the config file."""
    db_path = config.get("storage", {}).get("db_path")
    return Path(db_path).expanduser() if db_path else DEFAULT_DB_PATH


def get_user_id(config: dict) -> str:
    """Journal owner the CLI acts for."""
    return str(config.get("user", {}).get("id", DEFAULT_USER_ID))


def get_timezone(config: dict) -> Optional[pytz.BaseTzInfo]:
    """Timezone used for time-of-day bucketing.

    Returns:
        pytz timezone, or None to keep timestamps as stored.

    Raises:
        ValueError: If the configured zone name is unknown.
    """
    name = config.get("user", {}).get("timezone")
    if not name:
        return None
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError:
        raise ValueError(f"Unknown timezone in config: {name}")


def get_analysis_days(config: dict) -> int:
    """Number of days of history analyzed by default."""
    return int(config.get("analysis", {}).get("days", DEFAULT_ANALYSIS_DAYS))


def get_entry_limit(config: dict) -> int:
    """Maximum number of entries fetched for analysis."""
    return int(config.get("analysis", {}).get("limit", DEFAULT_ENTRY_LIMIT))


def get_situational_terms(config: dict) -> Optional[tuple[str, ...]]:
    """Configured trigger vocabulary, or None for the built-in one.

    Terms are lowercased and stripped; blanks and case-only duplicates
    are dropped.
    """
    terms = config.get("analysis", {}).get("situational_terms")
    if not terms:
        return None
    normalized = tuple(dict.fromkeys(
        str(term).strip().lower() for term in terms if str(term).strip()
    ))
    return normalized or None
