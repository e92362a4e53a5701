"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    data_dir: Path = Path(".smartchef")
    timezone: str = "UTC"
    storage_quota_bytes: int = 5 * 1024 * 1024
    log_retention_days: int = 365
    usage_history_days: int = 90
    dish_cache_ttl_days: int = 7
    dish_source_url: str | None = None
    dish_source_timeout_seconds: float = 30.0
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="SMARTCHEF_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
