"""Environment-based configuration using pydantic-settings.

``AppSettings`` loads configuration from ``SWARMCOMPAT_*`` environment
variables and an optional ``.env`` file. CLI flags override individual
fields through ``with_overrides``.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="SWARMCOMPAT_", case_sensitive=False, extra="ignore"
    )

    # Logging
    log_level: str = Field(default="WARNING", description="Application log level")
    log_format: str = Field(default="text", description="Log format: json or text")

    # Run storage and external UI scripts
    runs_dir: Path = Field(default=Path("swarm-runs"))
    ui_dir: Path = Field(default=Path("ui"), description="Directory holding <kind>-ui.js scripts")
    ui_runtime: str = Field(default="node", description="Interpreter used to run UI scripts")

    # Degradation behaviour
    fallback_to_text: bool = Field(default=True)
    enable_monitoring: bool = Field(default=False)
    show_progress: bool = Field(default=True)

    monitor_interval_seconds: float = Field(default=5.0, gt=0)
    recent_runs_limit: int = Field(default=5, ge=1)

    @field_validator("log_level")
    def validate_log_level(cls, v):
        if v.upper() not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return v.upper()

    @field_validator("log_format")
    def validate_log_format(cls, v):
        if v.lower() not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v.lower()

    def with_overrides(self, **overrides) -> "AppSettings":
        """Return a copy with every non-None override applied."""
        updates = {k: v for k, v in overrides.items() if v is not None}
        # Overrides pass through the same validators as environment values
        return type(self).model_validate({**self.model_dump(), **updates})
