"""Shared fixtures: an in-memory catalog database and an API client bound to it."""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401  (registers tables)
from app.database import Base, get_db
from app.main import app
from app.schemas.skill import SkillData
from app.services import skill_service

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


def make_record(slug: str, **overrides) -> dict:
    """A valid camelCase catalog record; override any field by its wire name."""
    org = overrides.get("org", "acme")
    repo = overrides.get("repo", "skills")
    record = {
        "slug": slug,
        "name": slug.replace("-", " ").title(),
        "org": org,
        "repo": repo,
        "description": f"{slug} does useful things",
        "commands": {"claudeCode": f"npx skills add {org}/{repo} --skill {slug}"},
        "tags": [],
        "agents": ["claude-code"],
        "installs": 100,
        "stars": 10,
        "lastUpdated": (NOW - timedelta(days=1)).isoformat(),
        "addedAt": (NOW - timedelta(days=60)).isoformat(),
        "repoUrl": f"https://github.com/{org}/{repo}",
        "featured": False,
        "verified": True,
    }
    record.update(overrides)
    return record


@pytest.fixture
def make_skill():
    """Build SkillData objects from ``make_record`` arguments."""

    def _make(slug: str, **overrides) -> SkillData:
        return SkillData.model_validate(make_record(slug, **overrides))

    return _make


@pytest_asyncio.fixture
async def db():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session
    await engine.dispose()


@pytest_asyncio.fixture
async def client(db: AsyncSession):
    async def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def catalog(db: AsyncSession, make_skill):
    """A small catalog across two orgs, with one unverified skill."""
    skills = [
        make_skill(
            "frontend-design", org="anthropics", repo="skills", installs=5000,
            tags=["frontend", "design"],
            commands={
                "claudeCode": "npx skills add anthropics/skills --skill frontend-design",
                "cursor": "cursor-install frontend-design",
            },
        ),
        make_skill("pdf", org="anthropics", repo="skills", installs=3000, tags=["documents"]),
        make_skill(
            "mcp-builder", org="anthropics", repo="tools", installs=800, tags=["mcp", "api"],
            lastUpdated=(NOW - timedelta(days=40)).isoformat(),
        ),
        make_skill(
            "vercel-deploy", org="vercel-labs", repo="agent-skills", installs=3000,
            tags=["deployment", "frontend"],
            lastUpdated=(NOW - timedelta(hours=2)).isoformat(),
        ),
        make_skill("hidden-gem", org="acme", repo="bots", installs=90000, verified=False),
    ]
    for skill in skills:
        await skill_service.insert_skill(db, skill)
    return skills
