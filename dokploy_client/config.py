"""Configuration management using Pydantic Settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Connection and behaviour settings, loaded from ``DOKPLOY_*`` env vars."""

    model_config = SettingsConfigDict(
        env_prefix="DOKPLOY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Platform API
    host: str = ""  # e.g. https://dokploy.example.com/api
    api_key: str = ""
    timeout_seconds: float = Field(default=30.0, gt=0)

    # Environment-variable reconciler
    env_update_attempts: int = Field(default=5, ge=1, le=20)
    env_update_backoff_ms: int = Field(default=100, ge=0)

    # Logging
    log_level: str = "info"
    log_json: bool = True

    # Shared secret for the provider HTTP service (empty = no check)
    service_api_key: str = ""


@lru_cache
def get_settings() -> Settings:
    return Settings()
