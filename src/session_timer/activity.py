"""Activity drafts created from stopped sessions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import UUID

from session_timer.timer.engine import StopResult
from session_timer.timer.formatting import formatted_duration


@dataclass
class ActivityDraft:
    """An unsaved activity awaiting a note, tags, and an objective link.

    Example:
        engine.on_session_stopped = lambda result: drafts.append(
            ActivityDraft.from_stop_result(result)
        )
    """
    started_at: datetime
    duration: float
    note: str = ""
    tags_text: str = ""
    objective_id: UUID | None = None

    @classmethod
    def from_stop_result(cls, result: StopResult) -> ActivityDraft:
        return cls(started_at=result.start_date, duration=result.duration)

    @property
    def ended_at(self) -> datetime:
        return self.started_at + timedelta(seconds=self.duration)

    @property
    def tags(self) -> list[str]:
        """Comma-separated tags, trimmed, empties dropped."""
        return [tag.strip() for tag in self.tags_text.split(",") if tag.strip()]

    def format_duration(self) -> str:
        return formatted_duration(self.duration)
