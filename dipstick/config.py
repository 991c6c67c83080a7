"""
Configuration settings for Dipstick.

Uses Pydantic Settings to load environment variables for logging and the
CLI's retry defaults. Only the CLI reads these; the retrieval pipeline itself
has no configuration surface.
"""
from __future__ import annotations

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("WARNING", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Retrieval defaults (caller-side; the pipeline never retries on its own)
    fetch_attempts: int = Field(1, ge=1, alias="DIPSTICK_FETCH_ATTEMPTS")
    retry_backoff_seconds: float = Field(0.5, ge=0.0, alias="DIPSTICK_RETRY_BACKOFF")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
