"""EmotionDetection boundary schema for language-model output."""

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from emotisense.models.entry import EmotionMetadata, EmotionTag, round_intensity


class EmotionDetection(BaseModel):
    """Validated result of an emotion-detection call."""

    primary_emotions: list[EmotionTag] = Field(
        ...,
        validation_alias=AliasChoices("primary_emotions", "primaryEmotions"),
        description="Detected emotions",
    )
    intensity: int = Field(default=0, ge=0, le=10, description="Overall intensity")
    complexity: str = Field(default="simple", description="simple or complex")
    sensory_elements: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("sensory_elements", "sensoryElements"),
    )
    cognitive_patterns: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("cognitive_patterns", "cognitivePatterns"),
    )
    error: Optional[str] = Field(default=None, description="Failure reason")
    fallback: bool = Field(default=False, description="True when detection failed")

    model_config = {"frozen": True}

    @field_validator("intensity", mode="before")
    @classmethod
    def _round_intensity(cls, value: Any) -> Any:
        return round_intensity(value)

    @property
    def metadata(self) -> EmotionMetadata:
        """Entry-level metadata to store alongside the emotions."""
        return EmotionMetadata(
            intensity=self.intensity,
            complexity=self.complexity,
            sensory_elements=self.sensory_elements,
            cognitive_patterns=self.cognitive_patterns,
        )
