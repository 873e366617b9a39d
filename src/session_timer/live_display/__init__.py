"""Live display surfaces for the running timer."""

from session_timer.live_display.controller import (
    LiveDisplayController,
    NullLiveDisplayController,
    StatusFileLiveDisplayController,
)

__all__ = [
    "LiveDisplayController",
    "NullLiveDisplayController",
    "StatusFileLiveDisplayController",
]
