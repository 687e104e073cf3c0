"""Seed service — loads catalog records into the store, idempotent by slug."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.schemas.skill import SkillData
from app.services import skill_service
from app.utils.skill_data import normalize_record

logger = logging.getLogger(__name__)


@dataclass
class SeedSummary:
    inserted: int = 0
    skipped: int = 0
    errors: int = 0

    @property
    def total(self) -> int:
        return self.inserted + self.skipped + self.errors

    def __str__(self) -> str:
        return (
            f"Inserted: {self.inserted}\nSkipped:  {self.skipped}\n"
            f"Errors:   {self.errors}\nTotal:    {self.total}"
        )


def _record(summary: SeedSummary, status: str, slug: str) -> None:
    if status == "inserted":
        summary.inserted += 1
        logger.debug("✓ Inserted: %s", slug)
    else:
        summary.skipped += 1
        logger.debug("- Skipped (exists): %s", slug)


async def seed_records(db: AsyncSession, records: list[dict[str, Any]]) -> SeedSummary:
    """Insert records straight through the service layer."""
    summary = SeedSummary()
    for record in records:
        slug = record.get("slug", "<no slug>")
        try:
            data = SkillData.model_validate(record)
        except ValidationError as exc:
            summary.errors += 1
            logger.error("✗ Invalid skill %s: %s", slug, exc)
            continue
        result = await skill_service.insert_skill(db, data)
        _record(summary, result.status, slug)
    return summary


async def seed_over_http(client: httpx.AsyncClient, records: list[dict[str, Any]]) -> SeedSummary:
    """Insert records through a running API's ``POST /api/skills/``."""
    summary = SeedSummary()
    for record in records:
        slug = record.get("slug", "<no slug>")
        try:
            resp = await client.post("/api/skills/", json=normalize_record(record))
            resp.raise_for_status()
        except (httpx.HTTPError, KeyError) as exc:
            summary.errors += 1
            logger.error("✗ Error inserting %s: %s", slug, exc)
            continue
        _record(summary, resp.json()["status"], slug)
    return summary


async def clear_over_http(client: httpx.AsyncClient) -> int:
    resp = await client.delete("/api/skills/")
    resp.raise_for_status()
    return resp.json()["deleted"]
