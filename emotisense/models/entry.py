"""JournalEntry and EmotionTag data models."""

import logging
import math
from datetime import date as date_type
from datetime import datetime
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

logger = logging.getLogger(__name__)


class EmotionTag(BaseModel):
    """A single emotion detected in an entry."""

    name: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("name", "emotion"),
        description="Emotion name as returned by the detector",
    )
    confidence: float = Field(..., ge=0, le=1, description="Detection confidence")
    indicators: list[str] = Field(
        default_factory=list, description="Phrases that suggest this emotion"
    )
    explanation: Optional[str] = Field(default=None, description="Detector rationale")

    model_config = {"frozen": True}


class EmotionMetadata(BaseModel):
    """Entry-level detection metadata."""

    intensity: int = Field(default=0, ge=0, le=10, description="Overall intensity")
    complexity: str = Field(default="simple", description="simple or complex")
    sensory_elements: list[str] = Field(default_factory=list)
    cognitive_patterns: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}

    @field_validator("intensity", mode="before")
    @classmethod
    def _round_intensity(cls, value: Any) -> Any:
        return round_intensity(value)


class JournalEntry(BaseModel):
    """Represents a daily reflection with its detected emotions."""

    id: Optional[int] = Field(default=None, description="Database ID")
    date: Optional[date_type] = Field(
        default=None, description="Calendar date the entry is attributed to"
    )
    text: str = Field(default="", description="User-authored text")
    emotions: list[EmotionTag] = Field(default_factory=list)
    created_at: Optional[datetime] = Field(
        default=None, description="Creation timestamp"
    )
    metadata: EmotionMetadata = Field(default_factory=EmotionMetadata)

    model_config = {"frozen": True}

    @field_validator("text", mode="before")
    @classmethod
    def _none_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("emotions", mode="before")
    @classmethod
    def _dedupe_emotions(cls, value: Any) -> Any:
        if value is None:
            return []
        seen = set()
        unique = []
        for tag in value:
            if isinstance(tag, EmotionTag):
                name = tag.name
            elif isinstance(tag, dict):
                name = tag.get("name", tag.get("emotion"))
            else:
                name = None
            if name is not None and name in seen:
                continue
            seen.add(name)
            unique.append(tag)
        return unique

    @property
    def emotion_names(self) -> list[str]:
        """Emotion names in detection order."""
        return [tag.name for tag in self.emotions]

    @property
    def timestamp(self) -> Optional[datetime]:
        """Moment used for time-of-day bucketing."""
        if self.created_at is not None:
            return self.created_at
        if self.date is not None:
            return datetime.combine(self.date, datetime.min.time())
        return None

    @classmethod
    def from_record(cls, record: dict) -> "JournalEntry":
        """Build an entry from a raw storage or export record.

        Accepts snake_case keys as well as the document shape used by the
        web app export (``userText``, ``detectedEmotions``, ``createdAt``,
        ``emotionMetadata``). Unparseable dates become ``None`` instead of
        failing, so the record still counts for text scanning. Records
        without a ``date`` key take the date of their creation timestamp.

        Args:
            record: Raw record dictionary.

        Returns:
            Validated JournalEntry.

        Raises:
            pydantic.ValidationError: If emotion tags are malformed.
        """
        raw_date = record.get("date")
        raw_created = record.get("created_at", record.get("createdAt"))

        created_at = parse_timestamp(raw_created)
        if raw_created is not None and created_at is None:
            logger.warning("Skipping unparseable timestamp %r", raw_created)

        entry_date = parse_date(raw_date)
        if entry_date is None:
            if raw_date is not None:
                logger.warning("Unparseable entry date %r", raw_date)
            elif "date" not in record and created_at is not None:
                entry_date = created_at.date()

        metadata = record.get("metadata", record.get("emotionMetadata")) or {}
        if isinstance(metadata, dict):
            metadata = {
                "intensity": metadata.get("intensity", 0),
                "complexity": metadata.get("complexity", "simple"),
                "sensory_elements": metadata.get(
                    "sensory_elements", metadata.get("sensoryElements", [])
                ),
                "cognitive_patterns": metadata.get(
                    "cognitive_patterns", metadata.get("cognitivePatterns", [])
                ),
            }

        return cls(
            id=record.get("id"),
            date=entry_date,
            text=record.get("text", record.get("userText")),
            emotions=record.get("emotions", record.get("detectedEmotions")),
            created_at=created_at,
            metadata=metadata,
        )


def parse_date(value: Any) -> Optional[date_type]:
    """Parse an ISO date or timestamp into a calendar date.

    Returns None when the value cannot be parsed.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date_type):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    try:
        return date_type.fromisoformat(text)
    except ValueError:
        pass
    parsed = parse_timestamp(text)
    return parsed.date() if parsed else None


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO timestamp, accepting a trailing ``Z``."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def round_intensity(value: Any) -> Any:
    """Round a fractional intensity such as 6.5 to the nearest integer.

    Other values pass through for normal validation.
    """
    if isinstance(value, float) and math.isfinite(value):
        return int(round(value))
    return value
