"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    daily_goal_ml: int = 2000
    timezone: str = "UTC"
    storage_backend: str = "memory"
    storage_path: str = ".data/intake_log.json"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    quick_add_amounts: str = "100,150,200,250"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_quick_add_amounts(raw: str | None) -> list[int]:
    """Parse quick-add intake amounts (milliliters) from env."""
    if raw is None:
        return []
    amounts: list[int] = []
    for chunk in raw.split(","):
        value = chunk.strip()
        if not value.isdigit():
            continue
        amount = int(value)
        if amount > 0 and amount not in amounts:
            amounts.append(amount)
    return amounts
