"""Live display controllers: the at-a-glance surface outside the main view."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Protocol

from session_timer.timer.snapshot import LiveDisplayState

logger = logging.getLogger(__name__)


class LiveDisplayController(Protocol):
    """Surface that mirrors the running timer.

    All calls are best-effort; the engine logs and ignores failures.
    """

    async def start_live_display(self, start_date: datetime, state: LiveDisplayState) -> None: ...

    async def update_live_display(self, state: LiveDisplayState) -> None: ...

    async def end_live_display(self) -> None: ...


class NullLiveDisplayController:
    """Controller for hosts without a live display."""

    async def start_live_display(self, start_date: datetime, state: LiveDisplayState) -> None:
        return None

    async def update_live_display(self, state: LiveDisplayState) -> None:
        return None

    async def end_live_display(self) -> None:
        return None


class StatusFileLiveDisplayController:
    """Writes the live display state to a JSON file for an external widget to read.

    While a display is active the file holds:

        {
            "active": true,
            "start_date": "...",
            "time_range": ["...", "..."],
            "counts_down": true,
            "title": "Focus",
            "detail": "Pomodoro • 25m focus, 5m break"
        }

    Ending the display writes a final up-counting state spanning the whole
    session with ``"active": false``.
    """

    def __init__(self, path: Path, clock: Callable[[], datetime] | None = None):
        self.path = Path(path)
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._start_date: datetime | None = None
        self._last_state: LiveDisplayState | None = None

    @property
    def is_active(self) -> bool:
        return self._start_date is not None

    async def start_live_display(self, start_date: datetime, state: LiveDisplayState) -> None:
        # Only one display at a time
        await self.end_live_display()

        self._start_date = start_date
        self._last_state = state
        self._write_state(state)
        logger.debug(f"Live display started: {state.title}")

    async def update_live_display(self, state: LiveDisplayState) -> None:
        if self._start_date is None:
            return
        self._last_state = state
        self._write_state(state)
        logger.debug(f"Live display updated: {state.title}")

    async def end_live_display(self) -> None:
        if self._start_date is None:
            return

        final_state = LiveDisplayState(
            time_range=(self._start_date, self._clock()),
            counts_down=False,
            title=self._last_state.title if self._last_state else "Session",
            detail=self._last_state.detail if self._last_state else None,
        )
        self._write_state(final_state, active=False)
        self._start_date = None
        self._last_state = None
        logger.debug("Live display ended")

    def read_status(self) -> dict:
        """Read the status file back; empty dict when missing or unreadable."""
        try:
            return json.loads(self.path.read_text())
        except (OSError, ValueError):
            return {}

    def _write_state(self, state: LiveDisplayState, active: bool = True) -> None:
        status = {"active": active, **state.to_dict()}
        if self._start_date is not None:
            status["start_date"] = self._start_date.isoformat()

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(status, indent=2))
        except OSError as e:
            logger.error(f"Failed to write live display status file: {e}")
