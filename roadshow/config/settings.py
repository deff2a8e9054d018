"""
Configuration Management for Roadshow Savings Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The budget rates used to be hard-coded constants; they are now settings
so a different rate card can be used without touching the calculator.
Derived figures are never persisted, so changing a rate changes every
displayed figure retroactively.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_STORAGE_KEY = "roadshow-savings-data"


class RateSettings(BaseSettings):
    """Budget rate card and commission policy."""

    model_config = SettingsConfigDict(
        env_prefix="ROADSHOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    room_rate_per_night: float = Field(
        default=100.0,
        ge=0.0,
        description="Budgeted cost of one sleeping-room night"
    )
    meeting_rate_per_day: float = Field(
        default=100.0,
        ge=0.0,
        description="Budgeted cost of one meeting-space day"
    )
    commission_rate: float = Field(
        default=0.20,
        ge=0.0,
        le=1.0,
        description="Share of positive savings paid out as commission"
    )


class StorageSettings(BaseSettings):
    """Local key-value storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ROADSHOW_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: Literal["file", "memory"] = Field(
        default="file",
        description="Which key-value backend to use"
    )
    data_dir: str = Field(
        default=".roadshow",
        description="Directory holding one JSON file per storage key"
    )
    key: str = Field(
        default=DEFAULT_STORAGE_KEY,
        min_length=1,
        pattern=r"^[A-Za-z0-9._-]+$",
        description="Key under which the show list is stored"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Display
    currency_symbol: str = Field(
        default="$",
        max_length=3,
        description="Symbol shown in front of monetary amounts"
    )

    # Activity log
    audit_history_size: int = Field(
        default=200,
        ge=0,
        le=10000,
        description="How many recent audit events are kept in memory"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Sub-settings are loaded lazily so one bad section does not
    # prevent the others from loading.

    @property
    def rates(self) -> RateSettings:
        return RateSettings()

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus a
    "<setting_name>_error" entry for every section that failed.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    for name in ("rates", "storage", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
