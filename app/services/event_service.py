"""Event service — append-only analytics sink (never read back by the app)."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.event import Event
from app.schemas.event import EventCreate
from app.utils.dates import to_naive_utc, utcnow


async def track_event(db: AsyncSession, data: EventCreate) -> None:
    db.add(
        Event(
            skill_slug=data.skill_slug,
            action=data.action.value,
            agent=data.agent.value if data.agent else None,
            timestamp=to_naive_utc(utcnow()),
        )
    )
    await db.commit()
