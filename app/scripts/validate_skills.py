"""
Check a catalog JSON file without modifying it. Exits 1 on any problem.

Usage:
    python -m app.scripts.validate_skills [path/to/skills.json]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from app.config import settings
from app.utils.skill_data import load_records, validate_records


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Validate a skills file")
    parser.add_argument("path", nargs="?", type=Path, default=settings.seed_file)
    args = parser.parse_args(argv)

    try:
        records = load_records(args.path)
    except (OSError, ValueError) as exc:
        print(f"Error: cannot read {args.path}: {exc}", file=sys.stderr)
        return 1

    errors = validate_records(records)
    if errors:
        print("Skill data validation failed:\n", file=sys.stderr)
        for error in errors:
            print(f"- {error}", file=sys.stderr)
        return 1

    print("Skill data validation passed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
