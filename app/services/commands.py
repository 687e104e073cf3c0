"""Install-command resolution for a skill + selected agent."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from app.schemas.agent import COMMAND_KEYS, DEFAULT_AGENT, AgentType, parse_agent


def _command_map(commands: Mapping[str, Any] | BaseModel | None) -> Mapping[str, Any]:
    if commands is None:
        return {}
    if isinstance(commands, BaseModel):
        return commands.model_dump(by_alias=True)
    return commands


def resolve_command(skill: Any, agent: AgentType | str | None) -> str:
    """Return the command for ``agent``, falling back to the default agent's.

    Total: unknown agents, missing entries and empty strings all fall back,
    and the result is always a string.
    """
    commands = _command_map(getattr(skill, "commands", None))
    default = commands.get(COMMAND_KEYS[DEFAULT_AGENT]) or ""

    known = parse_agent(agent)
    if known is None:
        return default
    return commands.get(COMMAND_KEYS[known]) or default
