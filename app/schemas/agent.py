"""Agent identifiers, display table and per-agent install command map."""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum
from typing import NamedTuple

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class AgentType(StrEnum):
    """AI coding tools a skill can be installed into."""

    CLAUDE_CODE = "claude-code"
    CODEX_CLI = "codex-cli"
    CURSOR = "cursor"
    OPEN_CODE = "open-code"
    GEMINI_CLI = "gemini-cli"


DEFAULT_AGENT = AgentType.CLAUDE_CODE


class AgentDisplay(NamedTuple):
    label: str
    order: int


AGENT_DISPLAY: dict[AgentType, AgentDisplay] = {
    AgentType.CLAUDE_CODE: AgentDisplay("Claude Code", 1),
    AgentType.CODEX_CLI: AgentDisplay("Codex CLI", 2),
    AgentType.CURSOR: AgentDisplay("Cursor", 3),
    AgentType.OPEN_CODE: AgentDisplay("Open Code", 4),
    AgentType.GEMINI_CLI: AgentDisplay("Gemini CLI", 5),
}

_UNRANKED = 999


def parse_agent(value: str | None) -> AgentType | None:
    """Return the matching AgentType, or None for unknown/empty ids."""
    if not value:
        return None
    try:
        return AgentType(value)
    except ValueError:
        return None


def agent_label(agent: str) -> str:
    known = parse_agent(agent)
    return AGENT_DISPLAY[known].label if known else agent


def sort_agents(agents: Iterable[str]) -> list[str]:
    """Order agent ids by display rank; unknown ids go last in input order."""

    def rank(agent: str) -> int:
        known = parse_agent(agent)
        return AGENT_DISPLAY[known].order if known else _UNRANKED

    return sorted(agents, key=rank)


class AgentCommands(BaseModel):
    """Install command per agent. The default agent's command is mandatory."""

    claude_code: str = Field(..., min_length=1)
    codex_cli: str | None = None
    cursor: str | None = None
    open_code: str | None = None
    gemini_cli: str | None = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


# AgentType → key in the stored (camelCase) commands mapping
COMMAND_KEYS: dict[AgentType, str] = {
    AgentType.CLAUDE_CODE: "claudeCode",
    AgentType.CODEX_CLI: "codexCli",
    AgentType.CURSOR: "cursor",
    AgentType.OPEN_CODE: "openCode",
    AgentType.GEMINI_CLI: "geminiCli",
}
