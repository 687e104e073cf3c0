"""Skill service — catalog reads, leaderboards, org/repo aggregation and seeding writes."""

from __future__ import annotations

import logging

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.skill import Skill
from app.schemas.skill import InsertResult, OrgStats, RepoStats, SkillData, TagCount
from app.services import ranking
from app.utils.dates import to_naive_utc
from app.utils.skill_data import derive_repo_url, normalize_skill_data, org_url

logger = logging.getLogger(__name__)

_BY_INSTALLS = (Skill.installs.desc(), Skill.slug)
_BY_RECENCY = (Skill.last_updated.desc(), Skill.slug)


async def _verified(db: AsyncSession, *criteria) -> list[Skill]:
    """Snapshot of publicly listed skills, in storage order."""
    stmt = select(Skill).where(Skill.verified.is_(True), *criteria).order_by(Skill.id)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def _top(db: AsyncSession, order_by: tuple, limit: int) -> list[Skill]:
    stmt = select(Skill).where(Skill.verified.is_(True)).order_by(*order_by).limit(limit)
    result = await db.execute(stmt)
    return list(result.scalars().all())


# ── Lookups ────────────────────────────────────────────────────────


async def list_skills(db: AsyncSession, limit: int | None = None) -> list[Skill]:
    stmt = select(Skill).order_by(Skill.id).limit(limit or settings.default_list_limit)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_skill_by_slug(db: AsyncSession, slug: str) -> Skill | None:
    result = await db.execute(select(Skill).where(Skill.slug == slug))
    return result.scalar_one_or_none()


async def get_skill_by_path(db: AsyncSession, org: str, repo: str, slug: str) -> Skill | None:
    """Slug lookup that also requires the skill to live in ``org/repo``."""
    skill = await get_skill_by_slug(db, slug)
    if skill is None or skill.org != org or skill.repo != repo:
        return None
    return skill


async def count_skills(db: AsyncSession) -> int:
    stmt = select(func.count()).select_from(Skill).where(Skill.verified.is_(True))
    return (await db.execute(stmt)).scalar_one()


# ── Search & listings ──────────────────────────────────────────────


async def search_skills(db: AsyncSession, query: str = "", tag: str | None = None) -> list[Skill]:
    if not query.strip() and not (tag or "").strip():
        return await _top(db, _BY_INSTALLS, settings.default_view_limit)
    return ranking.search_skills(
        await _verified(db),
        query,
        tag,
        limit=settings.search_result_limit,
        default_limit=settings.default_view_limit,
    )


async def hit_picks(db: AsyncSession, limit: int | None = None) -> list[Skill]:
    return await _top(db, _BY_INSTALLS, limit or settings.section_limit)


async def latest_drops(db: AsyncSession, limit: int | None = None) -> list[Skill]:
    return await _top(db, _BY_RECENCY, limit or settings.section_limit)


async def leaderboard_all_time(db: AsyncSession, limit: int | None = None) -> list[Skill]:
    return await _top(db, _BY_INSTALLS, limit or settings.leaderboard_limit)


async def leaderboard_trending(db: AsyncSession, limit: int | None = None) -> list[Skill]:
    # Placeholder ordering: most recently updated first, not install velocity.
    return await _top(db, _BY_RECENCY, limit or settings.leaderboard_limit)


async def leaderboard_hot(db: AsyncSession, limit: int | None = None) -> list[ranking.ScoredSkill]:
    return ranking.rank_hot(
        await _verified(db),
        limit or settings.leaderboard_limit,
        decay_days=settings.hot_decay_days,
    )


async def hot_spots(db: AsyncSession, limit: int | None = None) -> list[ranking.ScoredSkill]:
    return await leaderboard_hot(db, limit or settings.section_limit)


async def tag_counts(db: AsyncSession) -> list[TagCount]:
    return [TagCount(tag=t, count=c) for t, c in ranking.tag_counts(await _verified(db))]


# ── Orgs & repos ───────────────────────────────────────────────────


async def skills_by_org(db: AsyncSession, org: str) -> list[Skill]:
    skills = await _verified(db, Skill.org == org)
    return sorted(skills, key=ranking.by_installs)


async def skills_by_repo(db: AsyncSession, org: str, repo: str) -> list[Skill]:
    skills = await _verified(db, Skill.org == org, Skill.repo == repo)
    return sorted(skills, key=ranking.by_installs)


async def org_repos(db: AsyncSession, org: str) -> list[ranking.RepoBucket]:
    return ranking.group_by_repo(await _verified(db, Skill.org == org))


def _summarize_org(org: str, repos: list[ranking.RepoBucket]) -> OrgStats:
    return OrgStats(
        org=org,
        repo_count=len(repos),
        skill_count=sum(len(r.skills) for r in repos),
        total_installs=sum(r.total_installs for r in repos),
        github_url=org_url(org),
    )


async def org_stats(db: AsyncSession, org: str) -> OrgStats | None:
    repos = await org_repos(db, org)
    if not repos:
        return None
    return _summarize_org(org, repos)


async def repo_stats(db: AsyncSession, org: str, repo: str) -> RepoStats | None:
    skills = await skills_by_repo(db, org, repo)
    if not skills:
        return None
    return RepoStats(
        org=org,
        repo=repo,
        skill_count=len(skills),
        total_installs=ranking.total_installs(skills),
        github_url=derive_repo_url(org, repo),
    )


async def list_orgs(db: AsyncSession) -> list[OrgStats]:
    """Every org with at least one listed skill, largest install base first."""
    stats = [
        _summarize_org(org, repos)
        for org, repos in ranking.group_by_org(await _verified(db)).items()
    ]
    stats.sort(key=lambda s: (-s.total_installs, s.org))
    return stats


# ── Writes (seed / maintenance only) ───────────────────────────────


async def insert_skill(db: AsyncSession, data: SkillData) -> InsertResult:
    """Insert a skill unless its slug already exists; an existing slug is a skip."""
    if await get_skill_by_slug(db, data.slug) is not None:
        logger.debug("Skipping existing skill %s", data.slug)
        return InsertResult(status="skipped", slug=data.slug)

    normalized = normalize_skill_data(data)
    skill = Skill(
        **normalized.model_dump(exclude={"commands", "last_updated", "added_at"}),
        commands=normalized.commands.model_dump(by_alias=True, exclude_none=True),
        last_updated=to_naive_utc(normalized.last_updated),
        added_at=to_naive_utc(normalized.added_at),
    )
    db.add(skill)
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race with a concurrent insert of the same slug
        await db.rollback()
        return InsertResult(status="skipped", slug=data.slug)

    logger.info("Inserted skill %s (%s/%s)", skill.slug, skill.org, skill.repo)
    return InsertResult(status="inserted", slug=data.slug)


async def clear_all_skills(db: AsyncSession) -> int:
    result = await db.execute(delete(Skill))
    await db.commit()
    logger.warning("Deleted all %d skills", result.rowcount)
    return result.rowcount
