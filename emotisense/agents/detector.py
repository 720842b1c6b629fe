"""Emotion Detector Agent.

Sends entry text to a language model and turns the reply into a validated
EmotionDetection. Detection never raises: any failure produces a fallback
result tagged ``uncertain`` so the entry can still be saved.
"""

import json
import logging
import re
from typing import Optional

from agents import Agent
from pydantic import ValidationError

from emotisense.agents.base import create_agent, get_api_key, run_agent_sync
from emotisense.models import EmotionDetection

logger = logging.getLogger(__name__)


EMOTION_DETECTOR_INSTRUCTIONS = """You are an emotion detection specialist working with neurodivergent individuals, particularly those with alexithymia.

Identify the emotions in the user's journal text. Consider indirect emotional
expression, sensory descriptions and cognitive rather than emotional language.

Respond ONLY with valid JSON in this exact format:
{
  "primaryEmotions": [
    {
      "emotion": "string",
      "confidence": 0.8,
      "indicators": ["phrases that suggest this emotion"],
      "explanation": "brief explanation"
    }
  ],
  "intensity": 5,
  "complexity": "simple",
  "sensoryElements": ["sensory descriptions found"],
  "cognitivePatterns": ["thinking patterns that might mask emotions"]
}
"""

FALLBACK_EMOTION = "uncertain"
FALLBACK_CONFIDENCE = 0.1

_FENCE_RE = re.compile(r"^```(?:json)?\s*\n?|\n?```\s*$")
_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def _strip_code_fences(raw: str) -> str:
    """Remove a surrounding Markdown code fence, if any."""
    text = raw.strip()
    if text.startswith("```"):
        text = _FENCE_RE.sub("", text).strip()
    return text


def parse_detection_response(raw: str) -> EmotionDetection:
    """Parse a model reply into an EmotionDetection.

    Accepts bare JSON, JSON wrapped in a Markdown code fence, or prose with
    a single embedded JSON object.

    Args:
        raw: Text returned by the model.

    Returns:
        Validated EmotionDetection.

    Raises:
        ValueError: If no JSON object can be parsed or it does not match
            the schema.
    """
    text = _strip_code_fences(raw or "")

    try:
        payload = json.loads(text)
    except json.JSONDecodeError:
        match = _OBJECT_RE.search(text)
        if not match:
            raise ValueError(f"Model returned invalid JSON: {text[:200]}")
        try:
            payload = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            raise ValueError(f"Model returned invalid JSON: {e}")

    if not isinstance(payload, dict):
        raise ValueError("Invalid response structure: expected a JSON object")

    try:
        return EmotionDetection.model_validate(payload)
    except ValidationError as e:
        raise ValueError(f"Invalid response structure: {e}") from e


def fallback_detection(error: str) -> EmotionDetection:
    """Detection result used when the model call fails."""
    return EmotionDetection(
        primary_emotions=[
            {
                "name": FALLBACK_EMOTION,
                "confidence": FALLBACK_CONFIDENCE,
                "explanation": f"Unable to analyze emotions: {error}",
            }
        ],
        error=error,
        fallback=True,
    )


class EmotionDetectorAgent:
    """Agent that tags journal text with emotions."""

    def __init__(self, model: Optional[str] = None):
        """Initialize the Emotion Detector Agent.

        Args:
            model: Optional model override.
        """
        self._agent = self._create_agent(model)

    def _create_agent(self, model: Optional[str]) -> Agent:
        """Create the underlying agent."""
        return create_agent(
            name="Emotion Detector",
            instructions=EMOTION_DETECTOR_INSTRUCTIONS,
            model=model,
        )

    def detect(self, text: str) -> EmotionDetection:
        """Detect emotions in journal text.

        Args:
            text: Entry text.

        Returns:
            EmotionDetection. A fallback result if the API key is missing,
            the call fails, or the reply cannot be parsed.
        """
        if not get_api_key():
            logger.error("OPENAI_API_KEY is not set; using fallback detection")
            return fallback_detection("OPENAI_API_KEY is not set")

        try:
            reply = run_agent_sync(self._agent, text)
            return parse_detection_response(reply)
        except Exception as e:
            logger.error("Emotion detection failed: %s", e)
            return fallback_detection(str(e))
