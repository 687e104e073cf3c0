"""Seeding service and catalog script tests."""

import json
from pathlib import Path

import httpx
import pytest

from app.scripts import normalize_skills, validate_skills
from app.services import seed_service, skill_service
from conftest import make_record


@pytest.mark.asyncio
async def test_seed_records_is_idempotent(db):
    records = [make_record("a"), make_record("b", repo="nested/b")]

    first = await seed_service.seed_records(db, records)
    assert (first.inserted, first.skipped, first.errors) == (2, 0, 0)

    second = await seed_service.seed_records(db, records)
    assert (second.inserted, second.skipped, second.total) == (0, 2, 2)

    skill = await skill_service.get_skill_by_slug(db, "b")
    assert skill.repo == "b"
    assert skill.repo_url == "https://github.com/acme/b"


@pytest.mark.asyncio
async def test_seed_records_counts_invalid(db):
    bad = make_record("bad")
    del bad["commands"]
    summary = await seed_service.seed_records(db, [bad, make_record("ok")])
    assert (summary.inserted, summary.errors) == (1, 1)


@pytest.mark.asyncio
async def test_seed_over_http(client):
    records = [make_record("a"), make_record("a"), make_record("bad", installs=-1)]
    summary = await seed_service.seed_over_http(client, records)
    assert (summary.inserted, summary.skipped, summary.errors) == (1, 1, 1)

    deleted = await seed_service.clear_over_http(client)
    assert deleted == 1


@pytest.mark.asyncio
async def test_seed_over_http_reports_unreachable_api():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    transport = httpx.MockTransport(refuse)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        summary = await seed_service.seed_over_http(client, [make_record("a")])
    assert summary.errors == 1


def test_normalize_script_rewrites_file(tmp_path, capsys):
    path = tmp_path / "skills.json"
    path.write_text(json.dumps([make_record("a", repo="tools/cli")]))

    assert normalize_skills.main([str(path)]) == 0
    record = json.loads(path.read_text())[0]
    assert record["repo"] == "cli"
    assert record["repoUrl"] == "https://github.com/acme/cli"
    assert "Normalized 1 skills." in capsys.readouterr().out

    assert validate_skills.main([str(path)]) == 0


def test_validate_script_fails_on_bad_data(tmp_path, capsys):
    path = tmp_path / "skills.json"
    path.write_text(json.dumps([make_record("a", repo="tools/cli")]))

    assert validate_skills.main([str(path)]) == 1
    assert '[a] repo contains "/"' in capsys.readouterr().err


def test_validate_script_missing_file(tmp_path):
    assert validate_skills.main([str(tmp_path / "missing.json")]) == 1


def test_bundled_catalog_is_valid():
    path = Path(__file__).resolve().parents[1] / "data" / "skills.json"
    assert validate_skills.main([str(path)]) == 0
