"""
Application configuration module using Pydantic Settings.

This module provides centralized configuration for the campaign find-and-replace
tool: the dotdigital API endpoint, HTTP client behaviour, and the rate limit and
retry policies applied to campaign updates.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with validation.

    Settings are loaded from environment variables (prefixed with
    CAMPAIGN_REPLACE_) with fallback to a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="CAMPAIGN_REPLACE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # dotdigital API Configuration
    api_base_url: str = Field(
        default="https://r1-api.dotdigital.com",
        description="Base URL of the dotdigital API (region host, without /v2)",
    )
    http_timeout: float = Field(
        default=30.0,
        gt=0,
        le=300,
        description="Timeout in seconds for each HTTP request",
    )
    list_page_size: int = Field(
        default=1000,
        ge=1,
        le=1000,
        description="Number of campaigns requested per page when listing (API max 1000)",
    )

    # Rate Limiting (applied to campaign updates)
    rate_limit_refresh_period: float = Field(
        default=60.0,
        gt=0,
        description="Length of one rate limit window in seconds",
    )
    rate_limit_for_period: int = Field(
        default=5,
        ge=1,
        description="Maximum update admissions per rate limit window",
    )
    rate_limit_timeout: float = Field(
        default=3600.0,
        ge=0,
        description="Maximum seconds to wait for a rate limit permit before giving up",
    )

    # Retry Policy (applied to campaign updates)
    retry_max_attempts: int = Field(
        default=5,
        ge=1,
        le=20,
        description="Total attempts per update, including the first one",
    )
    retry_initial_interval: float = Field(
        default=0.5,
        ge=0,
        description="Delay in seconds before the first retry",
    )
    retry_multiplier: float = Field(
        default=2.0,
        ge=1.0,
        description="Backoff multiplier applied to the delay after each retry",
    )
    retry_max_interval: float = Field(
        default=30.0,
        ge=0,
        description="Upper bound in seconds for a single backoff delay",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Minimum level for structured log output on stderr",
    )

    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls, v: str) -> str:
        """
        Validate the API base URL is an http(s) URL and strip trailing slashes.
        """
        if not v.startswith(("https://", "http://")):
            raise ValueError("API base URL must start with https:// or http://")
        return v.rstrip("/")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept log levels in any case."""
        if isinstance(v, str):
            return v.upper()
        return v


# Global settings instance
settings = Settings()
