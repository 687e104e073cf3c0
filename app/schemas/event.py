"""Analytics event schemas."""

from enum import StrEnum

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from app.schemas.agent import AgentType


class EventAction(StrEnum):
    COPY = "copy"
    REPO_CLICK = "repo_click"
    VIEW = "view"


class EventCreate(BaseModel):
    skill_slug: str = Field(..., min_length=1, max_length=128)
    action: EventAction
    agent: AgentType | None = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}
