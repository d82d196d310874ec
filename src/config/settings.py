"""
Application settings - pydantic-settings configuration.

This module defines application configuration using pydantic-settings
for environment variable loading with validation and defaults.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from src.domain.models import DEFAULT_PROFILE_IMAGE


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Data source configuration
    data_source: Literal["dummyjson", "memory"] = "dummyjson"
    data_source_url: str = "https://dummyjson.com"
    request_timeout_seconds: float = 10.0
    fetch_limit: int = 30  # Users requested from the source on load

    # List view
    page_size: int = 5

    # Registration form
    require_profile_image: bool = False  # Image is optional unless set
    max_image_bytes: int = 2 * 1024 * 1024
    placeholder_image_url: str = DEFAULT_PROFILE_IMAGE

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
