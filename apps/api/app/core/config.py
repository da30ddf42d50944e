"""Application configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    auth_provider: Literal["mock", "firebase"] = "firebase"
    firebase_project_id: str | None = None
    firebase_audience: str | None = None
    admin_setup_secret: str | None = None

    rate_limit_enabled: bool = True
    auth_rate_limit_max_requests: int = Field(default=5, ge=1)
    auth_rate_limit_window_seconds: int = Field(default=60, ge=1)
    api_rate_limit_max_requests: int = Field(default=30, ge=1)
    api_rate_limit_window_seconds: int = Field(default=60, ge=1)

    response_cache_ttl_seconds: float = Field(default=120.0, ge=0)

    model_config = SettingsConfigDict(env_prefix="UGCMARKET_", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
