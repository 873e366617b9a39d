"""Tests for activity drafts built from stopped sessions."""

from datetime import timedelta

import pytest

from session_timer.activity import ActivityDraft
from session_timer.timer.engine import StopResult

from conftest import T0


def test_draft_from_stop_result():
    draft = ActivityDraft.from_stop_result(StopResult(start_date=T0, duration=1501))

    assert draft.started_at == T0
    assert draft.ended_at == T0 + timedelta(seconds=1501)
    assert draft.format_duration() == "25m 1s"
    assert draft.objective_id is None


def test_tags_are_split_and_trimmed():
    draft = ActivityDraft(started_at=T0, duration=60, tags_text=" deep work, ,writing ,")
    assert draft.tags == ["deep work", "writing"]


@pytest.mark.asyncio
async def test_engine_stop_produces_draft(make_engine, store):
    engine = make_engine(store)
    drafts = []
    engine.on_session_stopped = lambda result: drafts.append(ActivityDraft.from_stop_result(result))

    engine.start_session(T0)
    await engine.shutdown(T0 + timedelta(minutes=45))

    assert len(drafts) == 1
    assert drafts[0].format_duration() == "45m 0s"
