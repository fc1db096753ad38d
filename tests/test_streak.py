# tests/test_streak.py

from __future__ import annotations

from datetime import timedelta

from taskflow.core.events import StreakUpdated
from taskflow.core.state import AppState
from taskflow.tasks.task_models import TaskStatus

from .fakes import EventRecorder, FakeClock


def _complete(state: AppState, title: str):
    task = state.add_task(title)
    state.update_status(task.id, TaskStatus.COMPLETED)
    return task


def test_many_completions_in_one_day_count_once(state: AppState, clock: FakeClock, recorder: EventRecorder) -> None:
    for i in range(5):
        _complete(state, f"t{i}")
        clock.advance(minutes=30)

    assert state.engine.profile.streak == 1
    assert state.engine.profile.last_activity == clock.now().date()
    assert [e.streak for e in recorder.of_type(StreakUpdated)] == [1]


def test_redo_of_only_task_does_not_count_twice(state: AppState) -> None:
    task = _complete(state, "solo")
    state.update_status(task.id, TaskStatus.TODO)
    state.update_status(task.id, TaskStatus.COMPLETED)
    assert state.engine.profile.streak == 1


def test_next_day_first_completion_extends_streak(state: AppState, clock: FakeClock) -> None:
    _complete(state, "day one")
    clock.advance(days=1)
    _complete(state, "day two")
    _complete(state, "day two again")
    assert state.engine.profile.streak == 2


def test_check_daily_streak_breaks_after_gap(state: AppState, clock: FakeClock, recorder: EventRecorder) -> None:
    p = state.engine.profile
    p.streak = 4
    p.last_activity = clock.now().date() - timedelta(days=3)

    state.engine.check_daily_streak()

    assert p.streak == 0
    assert [e.streak for e in recorder.of_type(StreakUpdated)] == [0]


def test_check_daily_streak_same_day_unchanged(state: AppState, clock: FakeClock, recorder: EventRecorder) -> None:
    p = state.engine.profile
    p.streak = 4
    p.last_activity = clock.now().date()

    state.engine.check_daily_streak()

    assert p.streak == 4
    assert recorder.of_type(StreakUpdated) == []


def test_check_daily_streak_yesterday_without_work_today(state: AppState, clock: FakeClock) -> None:
    p = state.engine.profile
    p.streak = 4
    p.last_activity = clock.now().date() - timedelta(days=1)

    state.engine.check_daily_streak()

    assert p.streak == 4


def test_check_daily_streak_yesterday_with_work_today(state: AppState, clock: FakeClock) -> None:
    _complete(state, "already done today")
    p = state.engine.profile
    p.streak = 4
    p.last_activity = clock.now().date() - timedelta(days=1)

    state.engine.check_daily_streak()

    assert p.streak == 5
    assert p.last_activity == clock.now().date()


def test_check_daily_streak_without_history(state: AppState) -> None:
    state.engine.check_daily_streak()
    assert state.engine.profile.streak == 0
