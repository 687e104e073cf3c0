"""Skill ORM model — one catalog record per installable agent skill."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Skill(Base):
    __tablename__ = "skills"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)  # storage order
    slug: Mapped[str] = mapped_column(String(128), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(128))
    org: Mapped[str] = mapped_column(String(128), index=True)
    repo: Mapped[str] = mapped_column(String(256))  # final path segment only
    description: Mapped[str] = mapped_column(Text, default="")
    long_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    commands: Mapped[dict[str, Any]] = mapped_column(JSON)  # camelCase agent key → command
    tags: Mapped[list[str]] = mapped_column(JSON, default=list)
    agents: Mapped[list[str]] = mapped_column(JSON, default=list)
    installs: Mapped[int] = mapped_column(Integer, default=0, index=True)
    stars: Mapped[int] = mapped_column(Integer, default=0)
    velocity: Mapped[float | None] = mapped_column(Float, nullable=True)
    last_updated: Mapped[datetime] = mapped_column(DateTime, index=True)  # naive UTC
    added_at: Mapped[datetime] = mapped_column(DateTime)  # naive UTC
    repo_url: Mapped[str] = mapped_column(String(512))  # https://github.com/{org}/{repo}
    docs_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    featured: Mapped[bool] = mapped_column(default=False)
    verified: Mapped[bool] = mapped_column(default=False)
