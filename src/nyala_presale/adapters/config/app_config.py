"""12-factor configuration adapter using environment variables and TOML config."""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from nyala_presale.domain.models import WarningThresholds

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# TOML table -> fields it may override
_TOML_SECTIONS: dict[str, tuple[str, ...]] = {
    "countdown": (
        "countdown_tick_interval_ms",
        "reservation_warning_below_ms",
        "reservation_danger_below_ms",
    ),
    "shortlist": (
        "share_base_url",
        "shortlist_storage_key",
        "shortlist_storage_file",
    ),
}


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Countdown configuration
    countdown_tick_interval_ms: int = Field(
        default=1000, description="Interval between countdown ticks in milliseconds"
    )
    reservation_warning_below_ms: int = Field(
        default=900_000,
        description="Remaining milliseconds below which a reservation shows 'warning'",
    )
    reservation_danger_below_ms: int = Field(
        default=300_000,
        description="Remaining milliseconds below which a reservation shows 'danger'",
    )

    # Shortlist configuration
    share_base_url: str = Field(
        default="http://localhost:8000/explore",
        description="Base URL that shortlist share links are appended to",
    )
    shortlist_storage_key: str = Field(
        default="nyala_villas_shortlist",
        description="Storage key the shortlist is persisted under",
    )
    shortlist_storage_file: str | None = Field(
        default=None,
        description="JSON file backing shortlist persistence (None keeps it in memory)",
    )

    log_level: str = Field(default="INFO", description="Logging level for the reservation core")

    # Optional TOML file with [countdown] and [shortlist] tables
    config_file: str | None = Field(
        default=None,
        description="Path to TOML configuration file overriding countdown and shortlist settings",
    )

    @classmethod
    def for_testing(cls, **overrides: Any) -> "AppConfig":
        """Build a config that ignores any .env file."""
        return cls(_env_file=None, **overrides)  # type: ignore[call-arg]

    @field_validator("countdown_tick_interval_ms")
    @classmethod
    def validate_tick_interval(cls, v: int) -> int:
        """Validate the tick interval is positive."""
        if v <= 0:
            raise ValueError("countdown_tick_interval_ms must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard logging level name."""
        if v.upper() not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return v.upper()

    @model_validator(mode="after")
    def validate_thresholds(self) -> "AppConfig":
        """Validate the reservation thresholds form a valid WarningThresholds."""
        self.warning_thresholds()
        return self

    @property
    def tick_interval_seconds(self) -> float:
        """Tick interval in seconds."""
        return self.countdown_tick_interval_ms / 1000

    def warning_thresholds(self) -> WarningThresholds:
        """Build the reservation warning thresholds."""
        return WarningThresholds(
            warning_below_ms=self.reservation_warning_below_ms,
            danger_below_ms=self.reservation_danger_below_ms,
        )

    def load_toml_overrides(self) -> dict[str, Any]:
        """Apply [countdown] and [shortlist] tables from config_file, if set.

        Returns:
            The parsed TOML data (empty if no config_file is set).
        """
        if not self.config_file:
            return {}

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        for section, fields in _TOML_SECTIONS.items():
            table = toml_data.get(section, {})
            if not isinstance(table, dict):
                raise ValueError(f"TOML config '{section}' must be a table")
            for name in fields:
                if name in table:
                    setattr(self, name, table[name])

        if self.countdown_tick_interval_ms <= 0:
            raise ValueError("countdown_tick_interval_ms must be positive")
        self.warning_thresholds()
        return toml_data
