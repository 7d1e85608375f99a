"""Service settings, read from ``CATALOG_*`` environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CATALOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Product API"
    app_version: str = "1.0.0"

    # Server
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8080, description="Listen port")
    log_level: str = Field(default="INFO", description="Root log level")

    # Store
    seed_sample_data: bool = Field(
        default=True, description="Load the demo catalog at startup"
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
