"""Skill request/response schemas.

Field names are snake_case in Python and camelCase on the wire, matching the
catalog JSON in ``data/skills.json``.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from app.schemas.agent import AgentCommands, sort_agents
from app.utils.dates import ensure_utc

_CAMEL = {"alias_generator": to_camel, "populate_by_name": True}

# Fixed routes under /api/skills/ that a slug would otherwise shadow
RESERVED_SLUGS = frozenset({"search", "count", "tags", "hit-picks", "latest", "hot-spots"})


class SkillData(BaseModel):
    """One catalog record as ingested by the seed / normalize / validate steps."""

    slug: str = Field(..., pattern=r"^[^/\s]+$", max_length=128)
    name: str = Field(..., min_length=1, max_length=128)
    org: str = Field(..., pattern=r"^[^/\s]+$", max_length=128)
    repo: str = Field(..., min_length=1, max_length=256)  # normalized before storage
    description: str = ""
    long_description: str | None = None
    commands: AgentCommands
    tags: list[str] = []
    agents: list[str] = []
    installs: int = Field(0, ge=0)
    stars: int = Field(0, ge=0)
    velocity: float | None = None
    last_updated: datetime
    added_at: datetime
    repo_url: str | None = None  # derived from org + repo on normalize
    docs_url: str | None = None
    featured: bool = False
    verified: bool

    model_config = _CAMEL

    @field_validator("slug")
    @classmethod
    def not_reserved(cls, v: str) -> str:
        if v.lower() in RESERVED_SLUGS:
            raise ValueError(f"slug {v!r} is reserved for a listing route")
        return v

    @field_validator("repo")
    @classmethod
    def has_repo_segment(cls, v: str) -> str:
        if not any(part.strip() for part in v.split("/")):
            raise ValueError("repo must contain a non-empty path segment")
        return v

    @field_validator("last_updated", "added_at")
    @classmethod
    def to_utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    @model_validator(mode="after")
    def check_timeline(self) -> "SkillData":
        if self.added_at > self.last_updated:
            raise ValueError("addedAt must not be later than lastUpdated")
        return self


class SkillResponse(BaseModel):
    id: int
    slug: str
    name: str
    org: str
    repo: str
    description: str
    long_description: str | None = None
    commands: AgentCommands
    tags: list[str]
    agents: list[str]
    installs: int
    stars: int
    velocity: float | None = None
    last_updated: datetime
    added_at: datetime
    repo_url: str
    docs_url: str | None = None
    featured: bool
    verified: bool
    install_command: str | None = None  # resolved for the selected agent, when one is given

    model_config = {**_CAMEL, "from_attributes": True}

    @field_validator("last_updated", "added_at")
    @classmethod
    def to_utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    @field_validator("agents")
    @classmethod
    def in_display_order(cls, v: list[str]) -> list[str]:
        return sort_agents(v)


class HotSkillResponse(SkillResponse):
    heat_score: float


class SkillCard(SkillResponse):
    """Skill plus the display strings a listing card needs."""

    installs_label: str
    updated_label: str
    summary: str


class InsertResult(BaseModel):
    status: Literal["inserted", "skipped"]
    slug: str


class ClearResult(BaseModel):
    deleted: int


class CountResponse(BaseModel):
    count: int
    label: str


class TagCount(BaseModel):
    tag: str
    count: int


class OrgStats(BaseModel):
    org: str
    repo_count: int
    skill_count: int
    total_installs: int
    github_url: str

    model_config = _CAMEL


class RepoStats(BaseModel):
    org: str
    repo: str
    skill_count: int
    total_installs: int
    github_url: str

    model_config = _CAMEL


class RepoGroup(BaseModel):
    repo: str
    skills: list[SkillResponse]
    total_installs: int

    model_config = {**_CAMEL, "from_attributes": True}
