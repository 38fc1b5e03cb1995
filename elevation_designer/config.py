"""Application configuration utilities."""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .colors import ColorFormat


class Settings(BaseSettings):
    """Environment-driven configuration for the elevation designer service."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    port: int = Field(8000, validation_alias=AliasChoices("PORT", "port"))
    cache_capacity: int = Field(500, ge=1, validation_alias=AliasChoices("CACHE_CAPACITY", "cache_capacity"))
    default_color_format: ColorFormat = Field(
        "oklch", validation_alias=AliasChoices("DEFAULT_COLOR_FORMAT", "default_color_format")
    )
    log_level: str = Field("INFO", validation_alias=AliasChoices("LOG_LEVEL", "log_level"))
    cors_allow_origins: List[str] = Field(
        default_factory=lambda: ["*"], validation_alias=AliasChoices("CORS_ALLOW_ORIGINS", "cors_allow_origins")
    )


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()


def configure_logging(settings: Settings) -> None:
    """Apply the configured level to the package logger."""

    logging.getLogger("elevation_designer").setLevel(settings.log_level.upper())
