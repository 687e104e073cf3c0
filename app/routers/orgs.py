"""Organization and repository browsing endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.skill import OrgStats, RepoGroup, RepoStats, SkillResponse
from app.services import skill_service

router = APIRouter()


@router.get("/", response_model=list[OrgStats])
async def list_orgs(db: AsyncSession = Depends(get_db)):
    return await skill_service.list_orgs(db)


@router.get("/{org}", response_model=OrgStats)
async def get_org(org: str, db: AsyncSession = Depends(get_db)):
    stats = await skill_service.org_stats(db, org)
    if not stats:
        raise HTTPException(status_code=404, detail="Organization not found")
    return stats


@router.get("/{org}/skills", response_model=list[SkillResponse])
async def list_org_skills(org: str, db: AsyncSession = Depends(get_db)):
    return await skill_service.skills_by_org(db, org)


@router.get("/{org}/repos", response_model=list[RepoGroup])
async def list_org_repos(org: str, db: AsyncSession = Depends(get_db)):
    return [
        RepoGroup(
            repo=bucket.repo,
            skills=[SkillResponse.model_validate(s) for s in bucket.skills],
            total_installs=bucket.total_installs,
        )
        for bucket in await skill_service.org_repos(db, org)
    ]


@router.get("/{org}/repos/{repo}", response_model=RepoStats)
async def get_repo(org: str, repo: str, db: AsyncSession = Depends(get_db)):
    stats = await skill_service.repo_stats(db, org, repo)
    if not stats:
        raise HTTPException(status_code=404, detail="Repository not found")
    return stats


@router.get("/{org}/repos/{repo}/skills", response_model=list[SkillResponse])
async def list_repo_skills(org: str, repo: str, db: AsyncSession = Depends(get_db)):
    return await skill_service.skills_by_repo(db, org, repo)


@router.get("/{org}/repos/{repo}/skills/{slug}", response_model=SkillResponse)
async def get_repo_skill(org: str, repo: str, slug: str, db: AsyncSession = Depends(get_db)):
    skill = await skill_service.get_skill_by_path(db, org, repo, slug)
    if not skill:
        raise HTTPException(status_code=404, detail="Skill not found")
    return skill
