"""
pin-action Configuration

Configuration settings using pydantic-settings for environment variable support.
"""

from __future__ import annotations

import logging

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src import __version__

GITHUB_API_URL = "https://api.github.com"


class PinActionConfig(BaseSettings):
    """
    Configuration for GitHub ref resolution.

    Reads from environment variables with PIN_ACTION_ prefix. The token is
    also picked up from the conventional GITHUB_TOKEN variable.
    """

    model_config = SettingsConfigDict(
        env_prefix="PIN_ACTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # GitHub API
    github_api_url: str = Field(
        default=GITHUB_API_URL,
        min_length=8,
        description="Base URL of the GitHub REST API",
    )
    github_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_TOKEN", "PIN_ACTION_GITHUB_TOKEN", "github_token"),
        description="Token used for private repos and higher rate limits",
    )
    timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for each GitHub API request (seconds)",
    )
    user_agent: str = Field(
        default=f"pin-action/{__version__}",
        min_length=1,
        description="User-Agent sent with GitHub API requests",
    )

    # Resolution
    cache_enabled: bool = Field(
        default=True,
        description="Share resolution results between identical references",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Level of the pin-action package loggers",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level


def load_config() -> PinActionConfig:
    """Load configuration from environment."""
    return PinActionConfig()
