# tests/test_task_api.py

from __future__ import annotations

from datetime import timedelta

import pytest

from taskflow.core.events import TaskAdded
from taskflow.core.state import AppState
from taskflow.tasks.task_api import SAMPLE_TASKS, add_sample_tasks, suggest_titles, time_ago

from .fakes import EventRecorder, FakeClock


def test_add_sample_tasks(state: AppState, recorder: EventRecorder) -> None:
    added = add_sample_tasks(state)
    assert len(added) == len(SAMPLE_TASKS) == 6
    assert len(recorder.of_type(TaskAdded)) == 6
    assert sum(t.points for t in added) == 35 + 20 + 20 + 10 + 10 + 50


def test_suggest_titles() -> None:
    assert suggest_titles("pl") == []
    assert suggest_titles("FOCUS") == ["Organize workspace for better focus"]
    assert len(suggest_titles("e", limit=3)) == 0
    assert len(suggest_titles("for")) <= 3


@pytest.mark.parametrize(
    ("delta", "expected"),
    [
        (timedelta(seconds=20), "just now"),
        (timedelta(minutes=5), "5m ago"),
        (timedelta(hours=3), "3h ago"),
        (timedelta(days=1, hours=2), "yesterday"),
        (timedelta(days=4), "4d ago"),
        (timedelta(days=30), "2026-02-08"),
    ],
)
def test_time_ago(clock: FakeClock, delta: timedelta, expected: str) -> None:
    now = clock.now()
    assert time_ago(now - delta, now) == expected
