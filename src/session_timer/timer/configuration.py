"""Timer mode selection: continuous or Pomodoro."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_FOCUS_MINUTES = 25
DEFAULT_BREAK_MINUTES = 5

# Choices offered by the settings screen; any non-negative value is valid.
FOCUS_PRESETS = (15, 20, 25, 30, 40, 50, 60, 90)
BREAK_PRESETS = (3, 5, 10, 15)


class ContinuousMode(BaseModel):
    """Open-ended up-counting timer."""

    model_config = ConfigDict(frozen=True)

    type: Literal["continuous"] = "continuous"


class PomodoroMode(BaseModel):
    """Repeating focus/break cycle.

    Negative minute values are kept as given and clamped to zero when a
    session schedule is built from them.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: Literal["pomodoro"] = "pomodoro"
    focus_minutes: int = Field(alias="focusMinutes")
    break_minutes: int = Field(alias="breakMinutes")


TimerMode = Annotated[Union[ContinuousMode, PomodoroMode], Field(discriminator="type")]


class TimerConfiguration(BaseModel):
    """Selected timer mode.

    Serialized as the mode's tagged record:

        {"type": "continuous"}
        {"type": "pomodoro", "focusMinutes": 25, "breakMinutes": 5}
    """

    model_config = ConfigDict(frozen=True)

    mode: TimerMode = Field(default_factory=ContinuousMode)

    @classmethod
    def default(cls) -> TimerConfiguration:
        return cls(mode=ContinuousMode())

    @classmethod
    def continuous(cls) -> TimerConfiguration:
        return cls(mode=ContinuousMode())

    @classmethod
    def pomodoro(
        cls,
        focus_minutes: int = DEFAULT_FOCUS_MINUTES,
        break_minutes: int = DEFAULT_BREAK_MINUTES,
    ) -> TimerConfiguration:
        return cls(mode=PomodoroMode(focus_minutes=focus_minutes, break_minutes=break_minutes))

    @classmethod
    def from_record(cls, record: Any) -> TimerConfiguration:
        """Parse a tagged record. Raises pydantic.ValidationError if malformed."""
        return cls.model_validate({"mode": record})

    def to_record(self) -> dict[str, Any]:
        """Tagged record for persistence."""
        return self.mode.model_dump(by_alias=True)

    @property
    def is_pomodoro(self) -> bool:
        return isinstance(self.mode, PomodoroMode)

    @property
    def summary_text(self) -> str:
        """Short description, e.g. ``Pomodoro • 25m focus, 5m break``."""
        return summary_text(self.mode)

    @property
    def default_pomodoro_focus_minutes(self) -> int:
        if isinstance(self.mode, PomodoroMode):
            return self.mode.focus_minutes
        return DEFAULT_FOCUS_MINUTES

    @property
    def default_pomodoro_break_minutes(self) -> int:
        if isinstance(self.mode, PomodoroMode):
            return self.mode.break_minutes
        return DEFAULT_BREAK_MINUTES

    def with_continuous(self) -> TimerConfiguration:
        return TimerConfiguration.continuous()

    def with_pomodoro(self) -> TimerConfiguration:
        """Switch to Pomodoro, keeping current minutes or falling back to defaults."""
        return TimerConfiguration.pomodoro(
            self.default_pomodoro_focus_minutes,
            self.default_pomodoro_break_minutes,
        )

    def with_focus_minutes(self, minutes: int) -> TimerConfiguration:
        return TimerConfiguration.pomodoro(minutes, self.default_pomodoro_break_minutes)

    def with_break_minutes(self, minutes: int) -> TimerConfiguration:
        return TimerConfiguration.pomodoro(self.default_pomodoro_focus_minutes, minutes)


def summary_text(mode: ContinuousMode | PomodoroMode) -> str:
    if isinstance(mode, PomodoroMode):
        return f"Pomodoro • {mode.focus_minutes}m focus, {mode.break_minutes}m break"
    return "Continuous timer"
