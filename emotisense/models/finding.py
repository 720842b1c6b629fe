"""PatternFinding and related analysis result models."""

from enum import Enum
from typing import Optional, Union
from pydantic import BaseModel, Field


class FindingKind(str, Enum):
    """Kinds of pattern findings."""

    FREQUENCY = "frequency"
    TEMPORAL_TIME = "temporal_time"
    TEMPORAL_DAY = "temporal_day"
    SITUATIONAL = "situational"
    PHYSICAL = "physical"
    CONSISTENCY = "consistency"


class EmotionCount(BaseModel):
    """Occurrence count for a single emotion."""

    emotion: str = Field(..., description="Emotion name")
    count: int = Field(..., ge=0, description="Number of occurrences")

    model_config = {"frozen": True}


class EmotionGroup(BaseModel):
    """Emotions accumulated under a bucket, trigger or body category."""

    key: str = Field(..., description="Bucket, trigger term or category name")
    emotions: list[str] = Field(..., description="Distinct emotions, first-seen order")
    frequency: int = Field(..., ge=0, description="Total emotion occurrences")
    dominant_emotion: str = Field(..., description="Most frequent emotion")

    model_config = {"frozen": True}


class ConsistencyResult(BaseModel):
    """Day-to-day emotional overlap."""

    consistent_days: int = Field(..., ge=0, description="Transitions sharing an emotion")
    total_transitions: int = Field(..., ge=0, description="Adjacent-day transitions")

    model_config = {"frozen": True}


FindingData = Union[ConsistencyResult, list[EmotionGroup], list[EmotionCount]]


class PatternFinding(BaseModel):
    """A named pattern-detection result with a summary sentence."""

    kind: FindingKind = Field(..., description="Finding kind")
    title: str = Field(..., description="Display title")
    data: FindingData = Field(..., description="Kind-specific payload")
    insight: str = Field(..., description="Human-readable summary")

    model_config = {"frozen": True}


class JournalStats(BaseModel):
    """Summary statistics over a set of entries."""

    total_entries: int = Field(default=0, ge=0)
    avg_emotions_per_entry: float = Field(default=0.0, ge=0)
    most_common_emotion: Optional[str] = Field(default=None)
    streak_days: int = Field(default=0, ge=0)
    longest_streak: int = Field(default=0, ge=0)
    vocabulary_size: int = Field(default=0, ge=0)
    average_confidence: float = Field(default=0.0, ge=0)

    model_config = {"frozen": True}


class Metaphor(BaseModel):
    """A figurative phrase found in entry text."""

    text: str
    date: Optional[str] = None
    context: str = ""

    model_config = {"frozen": True}


class VocabularyReport(BaseModel):
    """Emotional vocabulary observed across entries."""

    vocabulary_size: int = Field(default=0, ge=0)
    unique_emotions: list[str] = Field(default_factory=list)
    emotion_evolution: dict[str, list[str]] = Field(default_factory=dict)
    metaphors: list[Metaphor] = Field(default_factory=list)
    growth_rate: float = Field(default=0.0, ge=0)

    model_config = {"frozen": True}
