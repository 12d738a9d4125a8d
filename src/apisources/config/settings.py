# src/apisources/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Supports environment variables (and a local .env file) with validation.

Files that USE this module:
- apisources.app (reads the Twelve Data API key and logging options)
- apisources.adapters.providers.* (default base URLs and HTTP timeouts)

Files that this module USES:
- apisources.shared.validators (validation functions for settings)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from typing import Optional  # Type hints for optional values

from pydantic import Field, field_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

from apisources.shared.validators import validate_http_url  # Validate endpoint base URLs

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Twelve Data (quotes) ---
    twelvedata_api_key: str = Field(default="", alias="TWELVEDATA_API_KEY")
    twelvedata_base_url: str = Field(
        default="https://api.twelvedata.com", alias="TWELVEDATA_BASE_URL"
    )

    # --- Open-Meteo (weather) ---
    openmeteo_forecast_url: str = Field(
        default="https://api.open-meteo.com/v1/forecast", alias="OPENMETEO_FORECAST_URL"
    )
    openmeteo_geocoding_url: str = Field(
        default="https://geocoding-api.open-meteo.com/v1/search", alias="OPENMETEO_GEOCODING_URL"
    )

    # --- Google News (RSS) ---
    googlenews_base_url: str = Field(default="https://news.google.com/rss", alias="GOOGLENEWS_BASE_URL")

    # --- HTTP Settings ---
    http_timeout_seconds: int = Field(default=10, alias="HTTP_TIMEOUT_SECONDS", ge=1, le=60)
    news_timeout_seconds: int = Field(default=10, alias="NEWS_TIMEOUT_SECONDS", ge=1, le=60)

    # --- Logging ---
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_stdout: bool = Field(default=True, alias="APISOURCES_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @field_validator("twelvedata_api_key")
    @classmethod
    def strip_api_key(cls, v: str) -> str:
        """Trim the API key. Its format is left to Twelve Data, checked only on quote calls."""
        return v.strip()

    @field_validator(
        "twelvedata_base_url",
        "openmeteo_forecast_url",
        "openmeteo_geocoding_url",
        "googlenews_base_url",
    )
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate endpoint URLs and drop any trailing slash."""
        if not validate_http_url(v):
            raise ValueError(f"Invalid endpoint URL: {v!r}")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate logging level name."""
        v = v.upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return v


# Global settings instance
settings = Settings()
