"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from food_mood.domain.moods import SCORE_TABLES

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    mood_score_table: str = "graded"
    weekly_min_logs: int = 3
    monthly_min_logs: int = 10
    pattern_min_logs: int = 10
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_score_table(raw: str | None) -> str:
    """Normalize the configured mood score table name."""
    if raw is None:
        return "graded"
    cleaned = raw.strip().lower()
    if cleaned in {"", "default"}:
        return "graded"
    if cleaned not in SCORE_TABLES:
        raise ValueError(f"Unknown mood score table: {raw}")
    return cleaned
