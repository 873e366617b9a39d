"""Session timer engine: lifecycle, snapshots, and Pomodoro phase monitoring."""

from __future__ import annotations

import asyncio
import logging
import weakref
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Awaitable, Callable

from session_timer.timer.configuration import (
    ContinuousMode,
    PomodoroMode,
    TimerConfiguration,
    summary_text,
)
from session_timer.timer.configuration_store import ConfigurationStore
from session_timer.timer.formatting import (
    formatted_countdown,
    formatted_duration,
    formatted_timer,
)
from session_timer.timer.pomodoro import PomodoroPhaseType, PomodoroSessionContext
from session_timer.timer.snapshot import SessionTimerSnapshot, distant_future

if TYPE_CHECKING:
    from session_timer.live_display.controller import LiveDisplayController

logger = logging.getLogger(__name__)

# Floor for the phase monitor's sleep so zero-length phases don't spin.
DEFAULT_MIN_MONITOR_SLEEP = 0.1

CONTINUOUS_TITLE = "Session Running"


@dataclass(frozen=True)
class StopResult:
    """A stopped session: when it started and how many seconds it counted."""
    start_date: datetime
    duration: float


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SessionTimerEngine:
    """Owns the session lifecycle and drives the live display.

    All state lives on one asyncio event loop. Time is never accumulated;
    every snapshot is computed from the session start and the instant asked
    about. While a Pomodoro session runs, a background task wakes at each
    phase boundary and pushes the new phase to the live display.

    Usage:
        engine = SessionTimerEngine(live_display, store)
        engine.on_session_stopped = lambda result: print(result.duration)

        engine.start_session()
        snapshot = engine.timer_snapshot(datetime.now(timezone.utc))
        engine.stop_session()
        await engine.flush_live_display()
    """

    def __init__(
        self,
        live_display: LiveDisplayController,
        configuration_store: ConfigurationStore,
        clock: Callable[[], datetime] | None = None,
        min_monitor_sleep: float = DEFAULT_MIN_MONITOR_SLEEP,
    ):
        self.live_display = live_display
        self.configuration_store = configuration_store
        self.min_monitor_sleep = min_monitor_sleep
        self._clock = clock or _utc_now

        try:
            self._timer_configuration = configuration_store.load()
        except Exception as e:
            logger.warning(f"Failed to load timer configuration, using default: {e}")
            self._timer_configuration = TimerConfiguration.default()

        # Callbacks
        self.on_session_stopped: Callable[[StopResult], None] | None = None

        # Session run state
        self._session_start_date: datetime | None = None
        self._session_mode_in_use: ContinuousMode | PomodoroMode | None = None
        self._pomodoro_context: PomodoroSessionContext | None = None
        self._phase_monitor_task: asyncio.Task | None = None
        self._last_reported_phase: PomodoroPhaseType | None = None

        # Display calls run one at a time, in the order they were issued
        self._display_lock = asyncio.Lock()
        self._display_tasks: set[asyncio.Task] = set()

    @property
    def timer_configuration(self) -> TimerConfiguration:
        return self._timer_configuration

    @timer_configuration.setter
    def timer_configuration(self, configuration: TimerConfiguration) -> None:
        """Replace the configuration, persisting it if it changed.

        A running session keeps the mode it started with.
        """
        if configuration == self._timer_configuration:
            return
        self._timer_configuration = configuration
        logger.info(f"Timer configuration changed: {configuration.summary_text}")

        try:
            self.configuration_store.save(configuration)
        except Exception as e:
            logger.error(f"Failed to persist timer configuration: {e}")

    @property
    def is_running(self) -> bool:
        return self._session_start_date is not None

    @property
    def active_session_start_date(self) -> datetime | None:
        return self._session_start_date

    @property
    def session_mode_in_use(self) -> ContinuousMode | PomodoroMode | None:
        """Mode captured when the running session started."""
        return self._session_mode_in_use

    @property
    def pomodoro_context(self) -> PomodoroSessionContext | None:
        return self._pomodoro_context

    @property
    def is_monitoring_phases(self) -> bool:
        return self._phase_monitor_task is not None and not self._phase_monitor_task.done()

    def start_session(self, now: datetime | None = None) -> None:
        """Start a session. Does nothing if one is already running."""
        if self._session_start_date is not None:
            return
        now = self._instant(now)

        self._session_start_date = now
        self._session_mode_in_use = self._timer_configuration.mode
        self._configure_pomodoro_context(now)

        snapshot = self.timer_snapshot(now, report_phase_change=False)
        self._last_reported_phase = snapshot.phase_type
        state = snapshot.live_display_state

        logger.info(f"Session started: {summary_text(self._session_mode_in_use)}")
        self._dispatch("start", lambda: self.live_display.start_live_display(now, state))

    def stop_session(self, now: datetime | None = None) -> None:
        """Stop the running session and report its duration.

        Pomodoro sessions report focus time only. Sessions that counted no
        time are discarded without notifying the observer.
        """
        start = self._session_start_date
        if start is None:
            return
        now = self._instant(now)

        duration = self._session_duration(now, start)

        self._session_start_date = None
        self._session_mode_in_use = None
        self._pomodoro_context = None
        self._cancel_phase_monitor()
        self._last_reported_phase = None

        self._dispatch("end", self.live_display.end_live_display)

        if duration <= 0:
            logger.info("Session stopped with no recorded time, discarding")
            return

        logger.info(f"Session stopped after {formatted_duration(duration)}")
        if self.on_session_stopped:
            try:
                self.on_session_stopped(StopResult(start_date=start, duration=duration))
            except Exception as e:
                logger.error(f"Error in on_session_stopped callback: {e}")

    def timer_snapshot(
        self, at: datetime, report_phase_change: bool = True
    ) -> SessionTimerSnapshot | None:
        """Compute what the timer shows at ``at``, or None when idle.

        With ``report_phase_change``, a Pomodoro phase that differs from the
        last one reported is pushed to the live display.
        """
        start = self._session_start_date
        if start is None:
            return None
        at = self._instant(at)

        mode = self._session_mode_in_use
        if mode is None:
            mode = self._timer_configuration.mode

        if isinstance(mode, PomodoroMode):
            context = self._pomodoro_context
            if context is None:
                context = PomodoroSessionContext.from_minutes(
                    start, mode.focus_minutes, mode.break_minutes
                )
                self._pomodoro_context = context
                self._start_phase_monitor()
            snapshot = self._pomodoro_snapshot(context, mode, at)
        else:
            snapshot = self._continuous_snapshot(start, at)

        if report_phase_change:
            self._report_phase_change(snapshot)

        return snapshot

    def elapsed_time_string(self, now: datetime | None = None) -> str:
        """Wall-clock time since the session started, as HH:MM:SS."""
        start = self._session_start_date
        if start is None:
            return "00:00:00"
        now = self._instant(now)
        return formatted_timer((now - start).total_seconds())

    async def flush_live_display(self) -> None:
        """Wait for every live display call issued so far to finish."""
        pending = [task for task in self._display_tasks if not task.done()]
        while pending:
            await asyncio.gather(*pending)
            pending = [task for task in self._display_tasks if not task.done()]

    async def shutdown(self, now: datetime | None = None) -> None:
        """Stop any running session and wait for the display to settle."""
        self.stop_session(now)
        await self.flush_live_display()

    def _instant(self, now: datetime | None) -> datetime:
        """Resolve ``now`` against the clock; naive instants are read as local time."""
        if now is None:
            now = self._clock()
        if now.tzinfo is None:
            now = now.astimezone(timezone.utc)
        return now

    def _continuous_snapshot(self, start: datetime, now: datetime) -> SessionTimerSnapshot:
        return SessionTimerSnapshot(
            title=CONTINUOUS_TITLE,
            value_text=formatted_timer((now - start).total_seconds()),
            detail_text=None,
            counts_down=False,
            time_range=(start, distant_future(start)),
            phase_type=None,
        )

    def _pomodoro_snapshot(
        self, context: PomodoroSessionContext, mode: PomodoroMode, now: datetime
    ) -> SessionTimerSnapshot:
        phase = context.phase(now)
        return SessionTimerSnapshot(
            title=phase.type.title,
            value_text=formatted_countdown(phase.remaining(now)),
            detail_text=summary_text(mode),
            counts_down=True,
            time_range=(phase.start_date, phase.end_date),
            phase_type=phase.type,
        )

    def _report_phase_change(self, snapshot: SessionTimerSnapshot) -> None:
        phase_type = snapshot.phase_type
        if phase_type is None or phase_type == self._last_reported_phase:
            return
        self._last_reported_phase = phase_type
        state = snapshot.live_display_state

        logger.info(f"Pomodoro phase changed: {phase_type.title}")
        self._dispatch("update", lambda: self.live_display.update_live_display(state))

    def _session_duration(self, now: datetime, start: datetime) -> float:
        context = self._pomodoro_context
        if isinstance(self._session_mode_in_use, PomodoroMode) and context is not None:
            return context.focus_time_elapsed(now)
        return (now - start).total_seconds()

    def _configure_pomodoro_context(self, start: datetime) -> None:
        mode = self._session_mode_in_use
        if not isinstance(mode, PomodoroMode):
            self._pomodoro_context = None
            self._cancel_phase_monitor()
            return

        self._pomodoro_context = PomodoroSessionContext.from_minutes(
            start, mode.focus_minutes, mode.break_minutes
        )
        self._start_phase_monitor()

    def _start_phase_monitor(self) -> None:
        self._cancel_phase_monitor()
        context = self._pomodoro_context
        if context is None:
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop, Pomodoro phase monitor not started")
            return

        self._phase_monitor_task = loop.create_task(
            _run_phase_monitor(weakref.ref(self), context)
        )

    def _cancel_phase_monitor(self) -> None:
        if self._phase_monitor_task:
            self._phase_monitor_task.cancel()
            self._phase_monitor_task = None

    def _monitors(self, context: PomodoroSessionContext) -> bool:
        """Whether ``context`` still belongs to the running session."""
        return self._session_start_date is not None and self._pomodoro_context is context

    def _dispatch(self, action: str, call: Callable[[], Awaitable[None]]) -> None:
        """Fire a live display call without waiting for it."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(f"No running event loop, skipping live display {action}")
            return

        task = loop.create_task(self._run_display_call(action, call))
        self._display_tasks.add(task)
        task.add_done_callback(self._display_tasks.discard)

    async def _run_display_call(self, action: str, call: Callable[[], Awaitable[None]]) -> None:
        async with self._display_lock:
            try:
                await call()
            except Exception as e:
                logger.error(f"Live display {action} failed: {e}")


async def _run_phase_monitor(
    engine_ref: weakref.ref[SessionTimerEngine], context: PomodoroSessionContext
) -> None:
    """Sleep until each phase boundary, then report the phase now in effect.

    Only a weak reference to the engine is held across sleeps. The loop ends
    when the engine is gone, the session stopped, or its context was replaced.
    """
    while True:
        engine = engine_ref()
        if engine is None or not engine._monitors(context):
            return
        try:
            now = engine._instant(None)
            delay = max(context.phase(now).remaining(now), engine.min_monitor_sleep)
        except Exception as e:
            logger.error(f"Error in Pomodoro phase monitor: {e}")
            return
        engine = None

        await asyncio.sleep(delay)

        engine = engine_ref()
        if engine is None or not engine._monitors(context):
            return
        try:
            engine.timer_snapshot(engine._instant(None), report_phase_change=True)
        except Exception as e:
            logger.error(f"Error in Pomodoro phase monitor: {e}")
            return
        engine = None
