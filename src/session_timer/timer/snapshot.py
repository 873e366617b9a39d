"""Point-in-time views of a running session."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from session_timer.timer.pomodoro import PomodoroPhaseType


def distant_future(reference: datetime) -> datetime:
    """Open end of an up-counting range, in the reference's timezone."""
    return datetime.max.replace(tzinfo=reference.tzinfo)


@dataclass(frozen=True)
class LiveDisplayState:
    """Payload sent to the live display surface."""
    time_range: tuple[datetime, datetime]
    counts_down: bool
    title: str
    detail: str | None = None

    def to_dict(self) -> dict[str, Any]:
        start, end = self.time_range
        return {
            "time_range": [start.isoformat(), end.isoformat()],
            "counts_down": self.counts_down,
            "title": self.title,
            "detail": self.detail,
        }


@dataclass(frozen=True)
class SessionTimerSnapshot:
    """What the timer shows at one instant."""
    title: str
    value_text: str
    detail_text: str | None
    counts_down: bool
    time_range: tuple[datetime, datetime]
    phase_type: PomodoroPhaseType | None = None

    @property
    def live_display_state(self) -> LiveDisplayState:
        return LiveDisplayState(
            time_range=self.time_range,
            counts_down=self.counts_down,
            title=self.title,
            detail=self.detail_text,
        )
