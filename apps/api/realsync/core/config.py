"""Application configuration for the inbox API."""
from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    app_env: str = Field(default="development")
    cors_allow_origins: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["*"])

    backend_base_url: str = Field(default="http://localhost:8000")
    backend_timeout_seconds: float = Field(default=10.0, gt=0)

    sidebar_badge_cap: int = Field(default=99, ge=1)
    channel_badge_cap: int = Field(default=9, ge=1)

    # Require "/inquiries" or "/inquiries/..." instead of a bare prefix match.
    link_segment_boundary: bool = Field(default=False)

    @field_validator("cors_allow_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: object) -> object:
        """Allow comma-separated env values for CORS origins."""

        if isinstance(value, str):
            parts = [item.strip() for item in value.split(",") if item.strip()]
            return parts
        return value


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()


settings = get_settings()
