"""12-factor configuration adapter using environment variables."""

from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from vrr_departures.adapters.vrr_api.constants import VRR_BASE_URL


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=8080, description="Port to bind the server to")

    # Upstream VRR (EFA) API configuration
    vrr_api_base_url: str = Field(
        default=VRR_BASE_URL, description="Base URL of the VRR EFA API"
    )
    vrr_api_timeout: int = Field(
        default=10, description="Timeout for VRR API requests in seconds"
    )
    timezone: str = Field(
        default="Europe/Berlin",
        validation_alias=AliasChoices("timezone", "tz"),
        description="IANA timezone used to compute 'now' for departure queries",
    )

    # Display client configuration
    relay_base_url: str | None = Field(
        default=None,
        description="Base URL of a remote relay (e.g. http://relay:8080). Unset = in-process relay",
    )
    storage_path: str = Field(
        default="data/board.json",
        description="Path of the JSON file holding the persisted board configuration",
    )
    storage_key: str = Field(
        default="vrr-departures:board-config",
        description="Namespaced key the board configuration is stored under",
    )
    board_defaults_file: str | None = Field(
        default=None,
        description="Optional TOML file seeding the built-in default board",
    )
    scheduler_stagger_seconds: float = Field(
        default=0.5, description="Offset between the first refreshes of consecutive stops"
    )
    scheduler_resolution_seconds: float = Field(
        default=0.25, description="How often the refresh scheduler checks for due stops"
    )
    title: str = Field(default="VRR Departures", description="Page title displayed in browser tab")

    log_level: str = Field(default="INFO", description="Root logging level")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate the timezone is a known IANA name."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"timezone must be a valid IANA timezone name, got '{v}'") from e
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard logging level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("log_level must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return level

    @field_validator("scheduler_stagger_seconds", "scheduler_resolution_seconds")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """Scheduler timings must not be negative."""
        if v < 0:
            raise ValueError("scheduler timings must not be negative")
        return v

    @classmethod
    def for_testing(cls, **overrides: Any) -> "AppConfig":
        """Create a config that does not read the .env file."""
        return cls(_env_file=None, **overrides)  # type: ignore[call-arg]
