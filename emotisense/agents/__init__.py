"""Language-model agents for EmotiSense.

This module provides the agents that sit upstream of pattern analysis:
- EmotionDetectorAgent: Tags journal text with detected emotions
"""

from emotisense.agents.base import (
    create_agent,
    run_agent_sync,
    get_model,
    get_api_key,
)
from emotisense.agents.detector import (
    EmotionDetectorAgent,
    fallback_detection,
    parse_detection_response,
)

__all__ = [
    # Base utilities
    "create_agent",
    "run_agent_sync",
    "get_model",
    "get_api_key",
    # Agents
    "EmotionDetectorAgent",
    # Utility functions
    "parse_detection_response",
    "fallback_detection",
]
