"""SkillIssue configuration — loaded from environment / .env file."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="SKILLISSUE_", extra="ignore")

    env: str = "development"
    database_url: str = "sqlite+aiosqlite:///./skillissue.db"
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000"]  # Next.js dev

    # Seed data (relative to project root)
    seed_file: Path = Path("data/skills.json")
    seed_on_startup: bool = False
    api_base_url: str = "http://127.0.0.1:8000"  # target for seeding over HTTP

    # Listing limits
    default_list_limit: int = 100
    default_view_limit: int = 20  # empty search → top N by installs
    search_result_limit: int = 50
    leaderboard_limit: int = 50
    section_limit: int = 10  # hit picks / latest drops / hot spots

    # Ranking
    hot_decay_days: float = 30.0

    # Client interaction timings
    search_debounce_ms: int = 150
    copied_indicator_seconds: float = 2.0

    @property
    def search_debounce_seconds(self) -> float:
        return self.search_debounce_ms / 1000


settings = Settings()
