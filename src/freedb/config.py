"""Configuration management for freedb using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Root configuration for freedb."""

    model_config = SettingsConfigDict(
        env_prefix="FREEDB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    db_file: str = Field(default="free.db", description="Default database file")
    autoload: bool = Field(default=True, description="Load db_file when a registry is created")
    log_level: str = "info"
    log_format: str = Field(default="console", pattern="^(console|json)$")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
