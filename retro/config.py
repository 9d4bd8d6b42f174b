"""
Configuration and settings for the retro backend.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings, read from ``RETRO_*`` variables."""

    model_config = SettingsConfigDict(
        env_prefix="RETRO_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Location of the single JSON document holding users and boards
    data_file: str = Field(default="./data.json")
    # Refuse to start over when the document exists but cannot be parsed
    strict_load: bool = Field(default=False)

    max_votes: int = Field(default=5, ge=0)

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)
    log_level: str = Field(default="INFO")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
