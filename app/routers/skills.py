"""Skill catalog endpoints — listings, search, leaderboards and seeding writes."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.skill import (
    ClearResult,
    CountResponse,
    HotSkillResponse,
    InsertResult,
    SkillData,
    SkillResponse,
    TagCount,
)
from app.services import ranking, skill_service
from app.utils.formatting import format_number

router = APIRouter()

Limit = Annotated[int | None, Query(ge=1, le=500)]


def _hot_response(scored: list[ranking.ScoredSkill]) -> list[HotSkillResponse]:
    return [
        HotSkillResponse(
            **SkillResponse.model_validate(item.skill).model_dump(), heat_score=item.heat_score
        )
        for item in scored
    ]


@router.get("/", response_model=list[SkillResponse])
async def list_skills(limit: Limit = None, db: AsyncSession = Depends(get_db)):
    return await skill_service.list_skills(db, limit=limit)


@router.post("/", response_model=InsertResult, status_code=201)
async def insert_skill(data: SkillData, response: Response, db: AsyncSession = Depends(get_db)):
    """Seed-only, idempotent by slug: an existing slug answers 200 with status=skipped."""
    result = await skill_service.insert_skill(db, data)
    if result.status == "skipped":
        response.status_code = 200
    return result


@router.delete("/", response_model=ClearResult)
async def clear_all_skills(db: AsyncSession = Depends(get_db)):
    """Delete every skill (reseeding only)."""
    return ClearResult(deleted=await skill_service.clear_all_skills(db))


@router.get("/search", response_model=list[SkillResponse])
async def search_skills(
    q: str = "", tag: str | None = None, db: AsyncSession = Depends(get_db)
):
    return await skill_service.search_skills(db, q, tag)


@router.get("/count", response_model=CountResponse)
async def count_skills(db: AsyncSession = Depends(get_db)):
    count = await skill_service.count_skills(db)
    return CountResponse(count=count, label=format_number(count))


@router.get("/tags", response_model=list[TagCount])
async def tag_counts(db: AsyncSession = Depends(get_db)):
    return await skill_service.tag_counts(db)


@router.get("/hit-picks", response_model=list[SkillResponse])
async def hit_picks(limit: Limit = None, db: AsyncSession = Depends(get_db)):
    return await skill_service.hit_picks(db, limit)


@router.get("/latest", response_model=list[SkillResponse])
async def latest_drops(limit: Limit = None, db: AsyncSession = Depends(get_db)):
    return await skill_service.latest_drops(db, limit)


@router.get("/hot-spots", response_model=list[HotSkillResponse])
async def hot_spots(limit: Limit = None, db: AsyncSession = Depends(get_db)):
    return _hot_response(await skill_service.hot_spots(db, limit))


@router.get("/leaderboard/all-time", response_model=list[SkillResponse])
async def leaderboard_all_time(limit: Limit = None, db: AsyncSession = Depends(get_db)):
    return await skill_service.leaderboard_all_time(db, limit)


@router.get("/leaderboard/trending", response_model=list[SkillResponse])
async def leaderboard_trending(limit: Limit = None, db: AsyncSession = Depends(get_db)):
    return await skill_service.leaderboard_trending(db, limit)


@router.get("/leaderboard/hot", response_model=list[HotSkillResponse])
async def leaderboard_hot(limit: Limit = None, db: AsyncSession = Depends(get_db)):
    return _hot_response(await skill_service.leaderboard_hot(db, limit))


@router.get("/{slug}", response_model=SkillResponse)
async def get_skill(slug: str, db: AsyncSession = Depends(get_db)):
    skill = await skill_service.get_skill_by_slug(db, slug)
    if not skill:
        raise HTTPException(status_code=404, detail="Skill not found")
    return skill
