"""
Rewrite a catalog JSON file so every ``repo`` is a single path segment and
every ``repoUrl`` is re-derived from ``org`` + ``repo``.

Usage:
    python -m app.scripts.normalize_skills [path/to/skills.json]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from app.config import settings
from app.utils.skill_data import load_records, normalize_record, write_records


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Normalize repo / repoUrl in a skills file")
    parser.add_argument("path", nargs="?", type=Path, default=settings.seed_file)
    args = parser.parse_args(argv)

    try:
        records = load_records(args.path)
        normalized = [normalize_record(r) for r in records]
    except (OSError, ValueError, KeyError) as exc:
        print(f"Error: cannot normalize {args.path}: {exc}", file=sys.stderr)
        return 1

    write_records(args.path, normalized)
    print(f"Normalized {len(normalized)} skills.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
