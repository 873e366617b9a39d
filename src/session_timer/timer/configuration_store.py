"""Persistence of the selected timer configuration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import yaml
from pydantic import ValidationError

from session_timer.timer.configuration import TimerConfiguration

logger = logging.getLogger(__name__)


class ConfigurationStore(Protocol):
    """Loads and saves a TimerConfiguration."""

    def load(self) -> TimerConfiguration: ...

    def save(self, configuration: TimerConfiguration) -> None: ...


class InMemoryConfigurationStore:
    """Keeps the configuration in process memory."""

    def __init__(self, configuration: TimerConfiguration | None = None):
        self.configuration = configuration or TimerConfiguration.default()
        self.save_count = 0

    def load(self) -> TimerConfiguration:
        return self.configuration

    def save(self, configuration: TimerConfiguration) -> None:
        self.configuration = configuration
        self.save_count += 1


class YamlConfigurationStore:
    """Stores the configuration's tagged record in a YAML file.

    A missing or unreadable file loads as the default (continuous) configuration.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> TimerConfiguration:
        if not self.path.exists():
            return TimerConfiguration.default()

        try:
            with open(self.path, encoding="utf-8") as f:
                record = yaml.safe_load(f)
            return TimerConfiguration.from_record(record)
        except (OSError, UnicodeDecodeError, yaml.YAMLError, ValidationError) as e:
            logger.warning(f"Invalid timer configuration in {self.path}, using default: {e}")
            return TimerConfiguration.default()

    def save(self, configuration: TimerConfiguration) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                yaml.safe_dump(configuration.to_record(), f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            logger.error(f"Failed to save timer configuration to {self.path}: {e}")
