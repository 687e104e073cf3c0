"""FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import async_session, get_db, init_db
from app.routers import events, home, orgs, skills
from app.services import seed_service, skill_service
from app.utils.skill_data import load_records

# ── Logging setup ────────────────────────────────────────────────────
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    datefmt="%H:%M:%S",
)

logger = logging.getLogger(__name__)


async def _seed_on_startup() -> None:
    """Load the bundled catalog file into the store (skips existing slugs)."""
    try:
        records = load_records(settings.seed_file)
    except (OSError, ValueError) as exc:
        logger.warning("Startup seed skipped, cannot read %s: %s", settings.seed_file, exc)
        return
    async with async_session() as session:
        summary = await seed_service.seed_records(session, records)
    logger.info(
        "Startup seed: %d inserted, %d skipped, %d errors",
        summary.inserted, summary.skipped, summary.errors,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    await init_db()
    if settings.seed_on_startup:
        await _seed_on_startup()
    yield


app = FastAPI(
    title="SkillIssue",
    description="Catalog and leaderboards of installable AI-agent skills",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount routers
app.include_router(skills.router, prefix="/api/skills", tags=["skills"])
app.include_router(orgs.router, prefix="/api/orgs", tags=["orgs"])
app.include_router(events.router, prefix="/api/events", tags=["events"])
app.include_router(home.router, prefix="/api/home", tags=["home"])


@app.get("/health")
async def health(db: AsyncSession = Depends(get_db)):
    count = await skill_service.count_skills(db)
    return {"status": "ok", "service": "skillissue", "skills": count}
