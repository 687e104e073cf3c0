"""Install command resolution and agent display helpers."""

from types import SimpleNamespace

from app.schemas.agent import AgentCommands, AgentType, agent_label, parse_agent, sort_agents
from app.services.commands import resolve_command

SKILL = SimpleNamespace(
    commands={"claudeCode": "claude add x", "cursor": "cursor add x", "codexCli": ""}
)


def test_resolves_agent_specific_command():
    assert resolve_command(SKILL, AgentType.CURSOR) == "cursor add x"
    assert resolve_command(SKILL, "cursor") == "cursor add x"


def test_falls_back_to_default_command():
    assert resolve_command(SKILL, AgentType.GEMINI_CLI) == "claude add x"
    assert resolve_command(SKILL, AgentType.CODEX_CLI) == "claude add x"  # empty string
    assert resolve_command(SKILL, "vim") == "claude add x"
    assert resolve_command(SKILL, None) == "claude add x"


def test_never_raises_without_commands():
    assert resolve_command(SimpleNamespace(), AgentType.CURSOR) == ""
    assert resolve_command(SimpleNamespace(commands={}), "cursor") == ""


def test_accepts_commands_model():
    skill = SimpleNamespace(commands=AgentCommands(claude_code="a", open_code="b"))
    assert resolve_command(skill, AgentType.OPEN_CODE) == "b"
    assert resolve_command(skill, AgentType.CURSOR) == "a"


def test_sort_agents_by_display_rank_unknown_last():
    assert sort_agents(["gemini-cli", "mystery", "claude-code", "cursor"]) == [
        "claude-code",
        "cursor",
        "gemini-cli",
        "mystery",
    ]


def test_agent_label_and_parse():
    assert agent_label("codex-cli") == "Codex CLI"
    assert agent_label("mystery") == "mystery"
    assert parse_agent("open-code") is AgentType.OPEN_CODE
    assert parse_agent("") is None
