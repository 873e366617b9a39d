"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from session_timer.core.config import AppSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("SESSION_TIMER_LOG_LEVEL", "SESSION_TIMER_DATA_DIR", "SESSION_TIMER_TIMER__REFRESH_SECONDS"):
        monkeypatch.delenv(name, raising=False)


def test_defaults(tmp_path):
    config = AppSettings(data_dir=tmp_path / "data", config_dir=tmp_path / "config")

    assert config.log_level == "WARNING"
    assert config.timer.min_monitor_sleep_seconds == 0.1
    assert config.live_display.enabled is True
    assert config.status_file == tmp_path / "data" / "live_display.json"
    assert config.timer_config_file == tmp_path / "config" / "timer.yaml"


def test_load_from_yaml(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "log_level: DEBUG\n"
        "timer:\n"
        "  refresh_seconds: 0.5\n"
        "live_display:\n"
        f"  status_file: {tmp_path / 'widget.json'}\n"
    )

    config = AppSettings.load(config_path)

    assert config.log_level == "DEBUG"
    assert config.timer.refresh_seconds == 0.5
    assert config.status_file == tmp_path / "widget.json"


def test_environment_overrides_yaml(tmp_path, monkeypatch):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("log_level: WARNING\n")
    monkeypatch.setenv("SESSION_TIMER_LOG_LEVEL", "ERROR")
    monkeypatch.setenv("SESSION_TIMER_TIMER__REFRESH_SECONDS", "2")

    config = AppSettings.load(config_path)

    assert config.log_level == "ERROR"
    assert config.timer.refresh_seconds == 2


def test_invalid_values_are_rejected():
    with pytest.raises(ValidationError):
        AppSettings(log_level="LOUD")
    with pytest.raises(ValidationError):
        AppSettings(timer={"min_monitor_sleep_seconds": 0})


def test_ensure_directories(tmp_path):
    config = AppSettings(
        data_dir=tmp_path / "data",
        log_dir=tmp_path / "logs",
        config_dir=tmp_path / "config",
    )
    config.ensure_directories()

    assert (tmp_path / "data").is_dir()
    assert (tmp_path / "logs").is_dir()
    assert (tmp_path / "config").is_dir()


def test_load_reads_settings_file_from_config_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("SESSION_TIMER_CONFIG_DIR", str(tmp_path))
    (tmp_path / "config.yaml").write_text("log_level: DEBUG\n")

    config = AppSettings.load()

    assert config.config_file == tmp_path / "config.yaml"
    assert config.log_level == "DEBUG"
