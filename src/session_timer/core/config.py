"""Configuration management with Pydantic and YAML support."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TimerSettings(BaseModel):
    """Session timer engine configuration."""

    min_monitor_sleep_seconds: float = Field(
        default=0.1, gt=0, description="Shortest sleep of the Pomodoro phase monitor"
    )
    refresh_seconds: float = Field(default=1.0, gt=0, description="CLI redraw interval")


class LiveDisplaySettings(BaseModel):
    """Live display surface configuration."""

    enabled: bool = True
    status_file: Path | None = Field(
        default=None, description="JSON status file for widgets, defaults to data_dir"
    )


class AppSettings(BaseSettings):
    """Main application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SESSION_TIMER_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Paths
    data_dir: Path = Field(default_factory=lambda: Path.home() / ".local/share/session-timer")
    log_dir: Path = Field(default_factory=lambda: Path.home() / ".local/state/session-timer")
    config_dir: Path = Field(default_factory=lambda: Path.home() / ".config/session-timer")

    # Log level
    log_level: str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    # Sub-configurations
    timer: TimerSettings = Field(default_factory=TimerSettings)
    live_display: LiveDisplaySettings = Field(default_factory=LiveDisplaySettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Environment wins over values loaded from the YAML file
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @property
    def config_file(self) -> Path:
        """Path to YAML settings file."""
        return self.config_dir / "config.yaml"

    @property
    def timer_config_file(self) -> Path:
        """Path to the persisted timer mode."""
        return self.config_dir / "timer.yaml"

    @property
    def status_file(self) -> Path:
        """Path to the live display status file."""
        return self.live_display.status_file or self.data_dir / "live_display.json"

    def ensure_directories(self) -> None:
        """Create all required directories."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.config_dir.mkdir(parents=True, exist_ok=True)

    @classmethod
    def load(cls, config_path: Path | None = None) -> AppSettings:
        """Load configuration from YAML file, environment variables, and defaults.

        Priority (highest to lowest):
        1. Environment variables
        2. YAML config file
        3. Default values
        """
        config_path = config_path or cls().config_file

        yaml_config: dict[str, Any] = {}
        if config_path.exists():
            with open(config_path) as f:
                yaml_config = yaml.safe_load(f) or {}

        return cls(**yaml_config)


@lru_cache
def get_config() -> AppSettings:
    """Get cached configuration instance."""
    return AppSettings.load()
