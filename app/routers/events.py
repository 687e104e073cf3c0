"""Analytics endpoint — fire-and-forget interaction events."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.event import EventCreate
from app.services import event_service

router = APIRouter()


@router.post("/", status_code=204)
async def track_event(data: EventCreate, db: AsyncSession = Depends(get_db)):
    await event_service.track_event(db, data)
