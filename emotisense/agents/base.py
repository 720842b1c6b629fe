"""Shared helpers for EmotiSense's language-model agents.

Model choice comes from ``OPENAI_MODEL``, then the ``[agent] model`` config
key, then DEFAULT_MODEL. The API key is read from ``OPENAI_API_KEY`` only.
"""

import logging
import os
from typing import Any, Optional

# Tracing uploads fail noisily when offline
os.environ.setdefault("OPENAI_AGENTS_DISABLE_TRACING", "1")

from agents import Agent, Runner
from rich.console import Console

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"

# Agent notices go to stderr so command output stays clean
_notice_console = Console(stderr=True)


def get_model(config: Optional[dict] = None) -> str:
    """Resolve the model name for detection calls."""
    env_model = os.environ.get("OPENAI_MODEL")
    if env_model:
        return env_model
    configured = (config or {}).get("agent", {}).get("model")
    return str(configured) if configured else DEFAULT_MODEL


def get_api_key() -> Optional[str]:
    """OpenAI API key, or None when detection is not configured."""
    return os.environ.get("OPENAI_API_KEY") or None


def create_agent(
    name: str,
    instructions: str,
    model: Optional[str] = None,
) -> Agent:
    """Build an Agent for a single-purpose prompt.

    Args:
        name: Display name, shown in the stderr notice.
        instructions: System prompt.
        model: Model override. Resolved with get_model() if None.
    """
    return Agent(name=name, instructions=instructions, model=model or get_model())


def run_agent_sync(
    agent: Agent,
    message: str,
    context: Optional[dict[str, Any]] = None,
) -> str:
    """Send one message to an agent and wait for its final output.

    Errors from the SDK propagate to the caller.
    """
    _notice_console.print(f"[dim]Agent: {agent.name} | Model: {agent.model}[/dim]")
    logger.debug("Running agent %s on %d characters", agent.name, len(message))
    result = Runner.run_sync(agent, message, context=context)
    return str(result.final_output)
