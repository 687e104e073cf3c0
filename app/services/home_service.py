"""Home service — composes the landing page from the URL search state."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.schemas.agent import AgentType
from app.schemas.home import HomeView, SearchState
from app.schemas.skill import SkillCard, SkillResponse, TagCount
from app.services import skill_service
from app.services.commands import resolve_command
from app.utils.formatting import format_count, format_relative_time, truncate

SUMMARY_LENGTH = 140


def to_card(skill: Any, agent: AgentType, now: datetime | None = None) -> SkillCard:
    base = SkillResponse.model_validate(skill)
    return SkillCard(
        **base.model_dump(exclude={"install_command"}),
        install_command=resolve_command(skill, agent),
        installs_label=format_count(skill.installs),
        updated_label=format_relative_time(base.last_updated, now),
        summary=truncate(skill.description, SUMMARY_LENGTH),
    )


def visible_tags(state: SearchState, all_tags: list[TagCount]) -> list[TagCount]:
    """Category chips: all of them, only the active one, or none while typing."""
    if not state.has_query:
        return all_tags
    if not state.tag:
        return []
    return [t for t in all_tags if t.tag == state.tag]


async def build_home(db: AsyncSession, state: SearchState) -> HomeView:
    view = HomeView(
        state=state,
        params=state.to_query_params(),
        filtering=state.is_filtering,
        result_label=state.result_label,
    )

    def cards(skills: Iterable[Any]) -> list[SkillCard]:
        return [to_card(s, state.agent) for s in skills]

    if state.is_filtering:
        view.results = cards(await skill_service.search_skills(db, state.query, state.tag))
        view.tags = visible_tags(state, await skill_service.tag_counts(db))
        return view

    view.tags = await skill_service.tag_counts(db)
    view.hit_picks = cards(await skill_service.hit_picks(db))
    view.latest_drops = cards(await skill_service.latest_drops(db))
    view.hot_spots = cards(scored.skill for scored in await skill_service.hot_spots(db))
    return view
