"""Pomodoro phase arithmetic derived from wall-clock timestamps."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

# Smallest cycle length representable by datetime arithmetic.
MIN_CYCLE_SECONDS = 1e-6


class PomodoroPhaseType(Enum):
    """Phase of a Pomodoro cycle."""
    FOCUS = "focus"
    REST = "rest"

    @property
    def title(self) -> str:
        if self == PomodoroPhaseType.FOCUS:
            return "Focus"
        return "Break"


@dataclass(frozen=True)
class PomodoroPhase:
    """A single focus or break interval, half-open: [start_date, end_date)."""
    type: PomodoroPhaseType
    start_date: datetime
    end_date: datetime

    @property
    def duration(self) -> float:
        return (self.end_date - self.start_date).total_seconds()

    def remaining(self, now: datetime) -> float:
        """Seconds left in this phase at ``now``, never negative."""
        return max((self.end_date - now).total_seconds(), 0.0)


@dataclass(frozen=True)
class PomodoroSessionContext:
    """Focus/break schedule anchored at a session start.

    Durations are in seconds. The schedule repeats focus then break forever;
    nothing is accumulated, every answer is computed from the start instant.

    Example:
        context = PomodoroSessionContext(start, focus_duration=1500, break_duration=300)
        context.phase(start + timedelta(minutes=26)).type  # PomodoroPhaseType.REST
    """
    start_date: datetime
    focus_duration: float
    break_duration: float

    @property
    def cycle_duration(self) -> float:
        total = self.focus_duration + self.break_duration
        return total if total > 0 else MIN_CYCLE_SECONDS

    def _split(self, date: datetime) -> tuple[float, float]:
        """Return (completed cycles, position within the current cycle)."""
        elapsed = max((date - self.start_date).total_seconds(), 0.0)
        cycle = self.cycle_duration
        completed = math.floor(elapsed / cycle)
        return completed, elapsed - completed * cycle

    def phase(self, at: datetime) -> PomodoroPhase:
        """Get the phase containing the instant ``at``."""
        completed, position = self._split(at)
        cycle_start = self.start_date + timedelta(seconds=completed * self.cycle_duration)

        if self.focus_duration <= 0:
            end = cycle_start + timedelta(seconds=max(self.break_duration, 0))
            return PomodoroPhase(PomodoroPhaseType.REST, cycle_start, end)

        if self.break_duration <= 0 or position < self.focus_duration:
            end = cycle_start + timedelta(seconds=self.focus_duration)
            return PomodoroPhase(PomodoroPhaseType.FOCUS, cycle_start, end)

        rest_start = cycle_start + timedelta(seconds=self.focus_duration)
        rest_end = rest_start + timedelta(seconds=self.break_duration)
        return PomodoroPhase(PomodoroPhaseType.REST, rest_start, rest_end)

    def focus_time_elapsed(self, until: datetime) -> float:
        """Cumulative focus seconds between the session start and ``until``.

        Break time is excluded; the value only grows during focus phases.
        """
        if self.focus_duration <= 0:
            return 0.0
        completed, remainder = self._split(until)
        return completed * self.focus_duration + min(remainder, self.focus_duration)

    @classmethod
    def from_minutes(
        cls, start_date: datetime, focus_minutes: int, break_minutes: int
    ) -> PomodoroSessionContext:
        """Build a context from minute counts, clamping negatives to zero."""
        return cls(
            start_date=start_date,
            focus_duration=float(max(focus_minutes, 0) * 60),
            break_duration=float(max(break_minutes, 0) * 60),
        )
