"""Environment-driven configuration helpers for CashoutLab."""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or .env files."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    odds_api_key: str = Field(default="", validation_alias="ODDS_API_KEY")
    odds_api_base_url: str = Field(default="https://api.the-odds-api.com/v4")
    default_regions: str = Field(default="us")
    http_timeout: float = Field(default=30.0, gt=0.0)

    cors_origin: str = Field(default="http://localhost:3000")
    port: int = Field(default=5000, ge=1, le=65535)
    log_level: str = Field(default="INFO")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()  # type: ignore[call-arg]


def get_odds_api_key() -> str:
    """Return The Odds API key or raise a helpful error."""

    key = os.getenv("ODDS_API_KEY") or get_settings().odds_api_key
    if not key:
        raise RuntimeError("ODDS_API_KEY is not configured. Set it in .env for local dev.")
    return key
