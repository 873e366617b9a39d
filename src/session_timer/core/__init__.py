"""Application settings."""

from session_timer.core.config import AppSettings, get_config

__all__ = ["AppSettings", "get_config"]
