"""
Seed the skills table from a catalog JSON file.

Re-running is safe: skills whose slug already exists are skipped.

Usage:
    python -m app.scripts.seed_skills                      # data/skills.json → local DB
    python -m app.scripts.seed_skills path/to/skills.json
    python -m app.scripts.seed_skills --api http://127.0.0.1:8000
    python -m app.scripts.seed_skills --clear              # wipe, then seed
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import httpx

from app.config import settings
from app.database import async_session, init_db
from app.services import seed_service, skill_service
from app.utils.skill_data import load_records

logger = logging.getLogger(__name__)


async def seed_local(records: list[dict], clear: bool) -> seed_service.SeedSummary:
    await init_db()
    async with async_session() as session:
        if clear:
            await skill_service.clear_all_skills(session)
        return await seed_service.seed_records(session, records)


async def seed_remote(api: str, records: list[dict], clear: bool) -> seed_service.SeedSummary:
    async with httpx.AsyncClient(base_url=api, timeout=30.0) as client:
        if clear:
            deleted = await seed_service.clear_over_http(client)
            logger.info("Cleared %d skills", deleted)
        return await seed_service.seed_over_http(client, records)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed the skill catalog")
    parser.add_argument("path", nargs="?", type=Path, default=settings.seed_file)
    parser.add_argument(
        "--api", nargs="?", const=settings.api_base_url,
        help="Seed through a running API instead of the local database",
    )
    parser.add_argument("--clear", action="store_true", help="Delete all skills before seeding")
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level.upper(), format="%(message)s")

    try:
        records = load_records(args.path)
    except (OSError, ValueError) as exc:
        print(f"Error: cannot read {args.path}: {exc}", file=sys.stderr)
        return 1

    print(f"Found {len(records)} skills to seed\n")
    if args.api:
        summary = asyncio.run(seed_remote(args.api, records, args.clear))
    else:
        summary = asyncio.run(seed_local(records, args.clear))

    print("\n--- Seeding Complete ---")
    print(summary)
    return 1 if summary.errors else 0


if __name__ == "__main__":
    sys.exit(main())
