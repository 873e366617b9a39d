"""Session timer core: Pomodoro phase math, configuration, snapshots, and the engine."""

from session_timer.timer.configuration import (
    BREAK_PRESETS,
    FOCUS_PRESETS,
    ContinuousMode,
    PomodoroMode,
    TimerConfiguration,
)
from session_timer.timer.configuration_store import (
    ConfigurationStore,
    InMemoryConfigurationStore,
    YamlConfigurationStore,
)
from session_timer.timer.engine import SessionTimerEngine, StopResult
from session_timer.timer.pomodoro import PomodoroPhase, PomodoroPhaseType, PomodoroSessionContext
from session_timer.timer.snapshot import LiveDisplayState, SessionTimerSnapshot

__all__ = [
    "BREAK_PRESETS",
    "FOCUS_PRESETS",
    "ContinuousMode",
    "PomodoroMode",
    "TimerConfiguration",
    "ConfigurationStore",
    "InMemoryConfigurationStore",
    "YamlConfigurationStore",
    "SessionTimerEngine",
    "StopResult",
    "PomodoroPhase",
    "PomodoroPhaseType",
    "PomodoroSessionContext",
    "LiveDisplayState",
    "SessionTimerSnapshot",
]
