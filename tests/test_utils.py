"""Formatting, URL state and catalog file helper tests."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from app.schemas.agent import AgentType
from app.schemas.home import SearchState
from app.utils.formatting import format_count, format_number, format_relative_time, truncate
from app.utils.skill_data import (
    derive_repo_url,
    load_records,
    normalize_record,
    normalize_repo,
    validate_records,
    write_records,
)
from conftest import make_record

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


# ── Formatting ─────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "n, expected",
    [(0, "0"), (999, "999"), (1000, "1.0K"), (1234, "1.2K"), (3_400_000, "3.4M")],
)
def test_format_count(n, expected):
    assert format_count(n) == expected


def test_format_number():
    assert format_number(1234567) == "1,234,567"
    assert format_number(1234.5) == "1,234.5"
    assert format_number(0.12345) == "0.123"


@pytest.mark.parametrize(
    "delta, expected",
    [
        (timedelta(seconds=30), "just now"),
        (timedelta(minutes=1), "1 minute ago"),
        (timedelta(minutes=5), "5 minutes ago"),
        (timedelta(hours=3), "3 hours ago"),
        (timedelta(days=1), "1 day ago"),
        (timedelta(days=45), "1 month ago"),
        (timedelta(days=400), "1 year ago"),
        (timedelta(days=800), "2 years ago"),
    ],
)
def test_format_relative_time(delta, expected):
    assert format_relative_time(NOW - delta, NOW) == expected


def test_format_relative_time_accepts_iso_z():
    assert format_relative_time("2025-06-15T10:00:00Z", NOW) == "2 hours ago"


def test_truncate():
    assert truncate("short", 10) == "short"
    assert truncate("abcdefghijkl", 10) == "abcdefg..."


# ── URL state ──────────────────────────────────────────────────────


def test_search_state_round_trip():
    state = SearchState(query="pdf", agent=AgentType.CURSOR, tag="documents")
    params = state.to_query_params()
    assert params == {"q": "pdf", "agent": "cursor", "tag": "documents"}
    assert SearchState.from_query_params(params) == state


def test_search_state_defaults_stay_out_of_url():
    assert SearchState().to_query_params() == {}


def test_unknown_agent_falls_back_to_default():
    state = SearchState.from_query_params({"agent": "emacs", "tag": "  "})
    assert state.agent is AgentType.CLAUDE_CODE
    assert state.tag is None


def test_result_label():
    assert SearchState(query="pdf", tag="docs").result_label == '"pdf" · tag: docs'
    assert SearchState(tag="docs").result_label == "tag: docs"
    assert not SearchState().is_filtering


# ── Catalog files ──────────────────────────────────────────────────


def test_normalize_repo_keeps_last_segment():
    assert normalize_repo("tools/cli") == "cli"
    assert normalize_repo("cli/") == "cli"
    assert normalize_repo("cli") == "cli"
    assert normalize_repo("tools/cli/ ") == "cli"


def test_normalize_record_rederives_repo_url():
    record = make_record("x", org="acme", repo="tools/cli", repoUrl="https://example.com")
    normalized = normalize_record(record)
    assert normalized["repo"] == "cli"
    assert normalized["repoUrl"] == "https://github.com/acme/cli"
    assert normalized["slug"] == "x"
    assert record["repo"] == "tools/cli"


def test_validate_clean_catalog():
    assert validate_records([make_record("a"), make_record("b")]) == []


def test_validate_reports_repo_problems():
    errors = validate_records([make_record("bad", repo="tools/cli")])
    assert '[bad] repo contains "/": tools/cli' in errors
    assert any("repoUrl mismatch" in e for e in errors)


def test_validate_reports_schema_errors():
    record = make_record("neg", installs=-1)
    del record["verified"]
    errors = validate_records([record])
    assert any(e.startswith("[neg] installs") for e in errors)
    assert any(e.startswith("[neg] verified") for e in errors)


def test_validate_rejects_added_after_updated():
    record = make_record("late", addedAt="2025-07-01T00:00:00Z", lastUpdated="2025-06-01T00:00:00Z")
    assert validate_records([record])


def test_write_then_load(tmp_path):
    path = tmp_path / "skills.json"
    write_records(path, [make_record("a")])
    assert path.read_text().endswith("\n")
    assert load_records(path)[0]["slug"] == "a"


def test_load_rejects_non_array(tmp_path):
    path = tmp_path / "skills.json"
    path.write_text(json.dumps({"slug": "a"}))
    with pytest.raises(ValueError):
        load_records(path)


def test_derive_repo_url():
    assert derive_repo_url("acme", "cli") == "https://github.com/acme/cli"


def test_validate_reports_reserved_slug_and_empty_repo():
    errors = validate_records([make_record("count"), make_record("x", repo="/")])
    assert any(e.startswith("[count] slug") for e in errors)
    assert any(e.startswith("[x] repo") for e in errors)
