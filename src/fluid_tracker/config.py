"""Application configuration."""

import logging
import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    store_path: str = "fluid-tracker.json"
    key_prefix: str = "moist"
    default_goal: float = 64.0
    default_goal_oz: bool = True
    prefer_oz: bool = True
    use_meridiem: bool = True
    timezone: str | None = None
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="FLUID_TRACKER_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def fluids_key(self) -> str:
        return f"{self.key_prefix}:fluids"

    @property
    def preferences_key(self) -> str:
        return f"{self.key_prefix}:prefs"


def parse_log_level(raw: str | None) -> int:
    """Parse a logging level name or number, defaulting to INFO."""
    if raw is None:
        return logging.INFO
    cleaned = raw.strip().upper()
    if cleaned.isdigit():
        return int(cleaned)
    level = logging.getLevelName(cleaned)
    if isinstance(level, int):
        return level
    return logging.INFO
