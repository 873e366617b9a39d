"""Shared fixtures: a fixed start instant, a settable clock, and a recording display."""

from datetime import datetime, timedelta, timezone

import pytest

from session_timer.timer.configuration import TimerConfiguration
from session_timer.timer.configuration_store import InMemoryConfigurationStore
from session_timer.timer.engine import SessionTimerEngine

T0 = datetime(2026, 1, 5, 9, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime = T0):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class RecordingLiveDisplay:
    """Live display that records every call, optionally failing each one."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls = []

    @property
    def actions(self):
        return [call[0] for call in self.calls]

    @property
    def updates(self):
        return [call[1] for call in self.calls if call[0] == "update"]

    async def start_live_display(self, start_date, state):
        self.calls.append(("start", start_date, state))
        if self.fail:
            raise RuntimeError("display unavailable")

    async def update_live_display(self, state):
        self.calls.append(("update", state))
        if self.fail:
            raise RuntimeError("display unavailable")

    async def end_live_display(self):
        self.calls.append(("end",))
        if self.fail:
            raise RuntimeError("display unavailable")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def display():
    return RecordingLiveDisplay()


@pytest.fixture
def store():
    return InMemoryConfigurationStore()


@pytest.fixture
def pomodoro_store():
    return InMemoryConfigurationStore(TimerConfiguration.pomodoro(25, 5))


@pytest.fixture
def make_engine(display, clock):
    def _make(store, **kwargs):
        return SessionTimerEngine(display, store, clock=clock, **kwargs)

    return _make
