"""Home page endpoint — reproduces the view for a ``?q=&agent=&tag=`` URL."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.home import HomeView, SearchState
from app.services import home_service

router = APIRouter()


@router.get("/", response_model=HomeView)
async def home(request: Request, db: AsyncSession = Depends(get_db)):
    state = SearchState.from_query_params(request.query_params)
    return await home_service.build_home(db, state)
