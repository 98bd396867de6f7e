"""
Configuration management for egdb.

Uses pydantic-settings for environment variable loading and validation.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="EGDB_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # EpiGraphDB API
    api_url: str = Field(
        default="https://api.epigraphdb.org",
        description="EpiGraphDB API base URL",
    )
    api_timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    api_retries: int = Field(default=3, ge=1, description="Attempts per request (transient errors)")

    # Relation graph
    pair_separator: str = Field(
        default="|",
        min_length=1,
        description="Separator used when joining a sorted entity pair into its key",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )


# Global settings instance
settings = Settings()
