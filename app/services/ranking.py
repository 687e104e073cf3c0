"""Search, leaderboard and aggregation logic over an in-memory skill snapshot.

Every function is pure: callers hand in a fresh snapshot on each read and get
a new list back, so results are recomputed rather than maintained. Equal
installs / heat scores are ordered by slug ascending.

``rank_hot`` scans the whole snapshot. That is fine for a catalog of a few
thousand skills; a much larger catalog would need the score kept in an index.
"""

from __future__ import annotations

import math
from collections import Counter, defaultdict
from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Any, NamedTuple, Protocol

from app.utils.dates import days_between, ensure_utc, utcnow


class SkillLike(Protocol):
    slug: str
    name: str
    org: str
    repo: str
    description: str
    tags: list[str]
    installs: int
    last_updated: datetime


class ScoredSkill(NamedTuple):
    skill: Any
    heat_score: float


class RepoBucket(NamedTuple):
    repo: str
    skills: list[Any]
    total_installs: int


def by_installs(skill: SkillLike) -> tuple[int, str]:
    return (-skill.installs, skill.slug)


def by_recency(skill: SkillLike) -> tuple[float, str]:
    return (-ensure_utc(skill.last_updated).timestamp(), skill.slug)


# ── Search ─────────────────────────────────────────────────────────


def matches_query(skill: SkillLike, query: str) -> bool:
    """Case-insensitive substring match on name, description, org or any tag."""
    needle = query.strip().lower()
    if not needle:
        return True
    haystacks = [skill.name, skill.description, skill.org, *skill.tags]
    return any(needle in (text or "").lower() for text in haystacks)


def matches_tag(skill: SkillLike, tag: str | None) -> bool:
    wanted = (tag or "").strip().lower()
    if not wanted:
        return True
    return any(t.lower() == wanted for t in skill.tags)


def search_skills(
    skills: Iterable[SkillLike],
    query: str = "",
    tag: str | None = None,
    *,
    limit: int = 50,
    default_limit: int = 20,
) -> list[SkillLike]:
    """Filter by query and tag, most installed first.

    With neither a query nor a tag this is the default view: the top
    ``default_limit`` skills by installs.
    """
    if not query.strip() and not (tag or "").strip():
        return rank_all_time(skills, default_limit)
    matched = [s for s in skills if matches_query(s, query) and matches_tag(s, tag)]
    matched.sort(key=by_installs)
    return matched[:limit]


# ── Leaderboards ───────────────────────────────────────────────────


def rank_all_time(skills: Iterable[SkillLike], limit: int = 50) -> list[SkillLike]:
    return sorted(skills, key=by_installs)[:limit]


def rank_trending(skills: Iterable[SkillLike], limit: int = 50) -> list[SkillLike]:
    # Recency stands in for growth velocity until install history is tracked.
    return sorted(skills, key=by_recency)[:limit]


def heat_score(installs: int, days_since_update: float, decay_days: float = 30.0) -> float:
    return installs * math.exp(-days_since_update / decay_days)


def rank_hot(
    skills: Iterable[SkillLike],
    limit: int = 50,
    *,
    now: datetime | None = None,
    decay_days: float = 30.0,
) -> list[ScoredSkill]:
    now = now or utcnow()
    scored = [
        ScoredSkill(s, heat_score(s.installs, days_between(s.last_updated, now), decay_days))
        for s in skills
    ]
    scored.sort(key=lambda item: (-item.heat_score, item.skill.slug))
    return scored[:limit]


# ── Aggregation ────────────────────────────────────────────────────


def group_by_repo(skills: Iterable[SkillLike]) -> list[RepoBucket]:
    """Repo buckets, largest total installs first (ties by repo name)."""
    buckets: dict[str, list[SkillLike]] = defaultdict(list)
    for skill in skills:
        buckets[skill.repo].append(skill)

    grouped = [
        RepoBucket(repo, sorted(members, key=by_installs), sum(s.installs for s in members))
        for repo, members in buckets.items()
    ]
    grouped.sort(key=lambda b: (-b.total_installs, b.repo))
    return grouped


def group_by_org(skills: Iterable[SkillLike]) -> dict[str, list[RepoBucket]]:
    orgs: dict[str, list[SkillLike]] = defaultdict(list)
    for skill in skills:
        orgs[skill.org].append(skill)
    return {org: group_by_repo(members) for org, members in orgs.items()}


def tag_counts(skills: Iterable[SkillLike]) -> list[tuple[str, int]]:
    """(tag, count) pairs, most used first, then alphabetical."""
    counts = Counter(tag for skill in skills for tag in skill.tags)
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))


def total_installs(skills: Sequence[SkillLike]) -> int:
    return sum(s.installs for s in skills)
