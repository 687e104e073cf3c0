"""Catalog file helpers — loading, normalizing and validating skill records.

The invariant enforced here: ``repo`` is a single path segment and
``repoUrl == https://github.com/{org}/{repo}``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from app.schemas.skill import SkillData

GITHUB_BASE = "https://github.com"


def derive_repo_url(org: str, repo: str) -> str:
    return f"{GITHUB_BASE}/{org}/{repo}"


def org_url(org: str) -> str:
    return f"{GITHUB_BASE}/{org}"


def normalize_repo(repo: str) -> str:
    """Keep only the final path segment: 'tools/cli' → 'cli'."""
    segments = [part.strip() for part in repo.split("/") if part.strip()]
    return segments[-1] if segments else repo


def normalize_skill_data(skill: SkillData) -> SkillData:
    repo = normalize_repo(skill.repo)
    return skill.model_copy(update={"repo": repo, "repo_url": derive_repo_url(skill.org, repo)})


def normalize_record(record: dict[str, Any]) -> dict[str, Any]:
    """Normalize a raw JSON record without touching any other field."""
    repo = normalize_repo(record["repo"])
    return {**record, "repo": repo, "repoUrl": derive_repo_url(record["org"], repo)}


def validate_records(records: list[dict[str, Any]]) -> list[str]:
    """Return one message per problem; an empty list means the catalog is clean."""
    errors: list[str] = []
    for record in records:
        slug = record.get("slug", "<no slug>")
        try:
            skill = SkillData.model_validate(record)
        except ValidationError as exc:
            for err in exc.errors():
                loc = ".".join(str(p) for p in err["loc"]) or "record"
                errors.append(f"[{slug}] {loc}: {err['msg']}")
            continue

        if "/" in skill.repo:
            errors.append(f'[{slug}] repo contains "/": {skill.repo}')

        expected = normalize_skill_data(skill).repo_url
        if skill.repo_url != expected:
            errors.append(f"[{slug}] repoUrl mismatch: expected {expected}, found {skill.repo_url}")
    return errors


def load_records(path: Path) -> list[dict[str, Any]]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array of skills")
    return data


def write_records(path: Path, records: list[dict[str, Any]]) -> None:
    path.write_text(json.dumps(records, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
