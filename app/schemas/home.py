"""Home page view — URL search state and the sections it selects."""

from collections.abc import Mapping

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from app.schemas.agent import DEFAULT_AGENT, AgentType, parse_agent
from app.schemas.skill import SkillCard, TagCount

_CAMEL = {"alias_generator": to_camel, "populate_by_name": True}


class SearchState(BaseModel):
    """Shareable UI state, mirrored 1:1 by the ``?q=&agent=&tag=`` URL params."""

    query: str = ""
    agent: AgentType = DEFAULT_AGENT
    tag: str | None = None

    @classmethod
    def from_query_params(cls, params: Mapping[str, str]) -> "SearchState":
        return cls(
            query=params.get("q") or "",
            agent=parse_agent(params.get("agent")) or DEFAULT_AGENT,
            tag=(params.get("tag") or "").strip() or None,
        )

    def to_query_params(self) -> dict[str, str]:
        """Inverse of ``from_query_params``; defaults are left out of the URL."""
        params: dict[str, str] = {}
        if self.query:
            params["q"] = self.query
        if self.agent != DEFAULT_AGENT:
            params["agent"] = self.agent.value
        if self.tag:
            params["tag"] = self.tag
        return params

    @property
    def has_query(self) -> bool:
        return bool(self.query.strip())

    @property
    def is_filtering(self) -> bool:
        return self.has_query or bool(self.tag)

    @property
    def result_label(self) -> str:
        parts = []
        if self.has_query:
            parts.append(f'"{self.query}"')
        if self.tag:
            parts.append(f"tag: {self.tag}")
        return " · ".join(parts)


class HomeView(BaseModel):
    state: SearchState
    params: dict[str, str]
    filtering: bool
    result_label: str = ""
    results: list[SkillCard] | None = None
    tags: list[TagCount] = []
    hit_picks: list[SkillCard] | None = None
    latest_drops: list[SkillCard] | None = None
    hot_spots: list[SkillCard] | None = None

    model_config = _CAMEL
