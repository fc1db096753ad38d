# tests/test_engine.py

from __future__ import annotations

from datetime import timedelta

import pytest

from taskflow.core.events import AchievementUnlocked, LevelUp, MoodChanged, ProfileReset
from taskflow.core.state import AppState
from taskflow.errors import ValidationError
from taskflow.game.profile import Mood
from taskflow.tasks.task_models import TaskStatus

from .fakes import EventRecorder, FakeClock


def _complete(state: AppState, title: str = "t", priority: str = "medium"):
    task = state.add_task(title, priority)
    state.update_status(task.id, TaskStatus.COMPLETED)
    return task


def test_xp_accumulates_below_threshold(state: AppState) -> None:
    _complete(state, "a", "high")
    p = state.engine.profile
    assert (p.level, p.xp) == (1, 35)


def test_level_up_discards_overflow(state: AppState, recorder: EventRecorder) -> None:
    p = state.engine.profile
    p.xp = 90

    _complete(state, "big", "high")

    assert p.level == 2
    assert p.xp == 0
    assert [e.new_level for e in recorder.of_type(LevelUp)] == [2]


def test_exactly_one_level_up_per_award(state: AppState) -> None:
    engine = state.engine
    assert engine.award_xp(1000) is True
    assert (engine.profile.level, engine.profile.xp) == (2, 0)

    assert engine.award_xp(199) is False
    assert (engine.profile.level, engine.profile.xp) == (2, 199)

    assert engine.award_xp(1) is True
    assert (engine.profile.level, engine.profile.xp) == (3, 0)


def test_negative_xp_is_ignored(state: AppState) -> None:
    assert state.engine.award_xp(-10) is False
    assert state.engine.profile.xp == 0


def test_recompletion_awards_points_again(state: AppState) -> None:
    task = _complete(state, "redo me", "low")
    state.update_status(task.id, TaskStatus.TODO)
    state.update_status(task.id, TaskStatus.COMPLETED)
    assert state.engine.profile.xp == 20


def test_total_points_follow_completed_tasks(state: AppState) -> None:
    a = _complete(state, "a", "legendary")
    _complete(state, "b", "low")
    assert state.engine.profile.total_points == 60

    state.update_status(a.id, TaskStatus.TODO)
    assert state.engine.profile.total_points == 10

    state.delete_task(a.id)
    assert state.engine.profile.total_points == 10


def test_first_task_badge_unlocks_once(state: AppState, recorder: EventRecorder) -> None:
    task = state.add_task("nothing yet")
    assert "first-task" not in state.engine.profile.badges

    state.update_status(task.id, TaskStatus.COMPLETED)
    _complete(state, "second")
    state.update_status(task.id, TaskStatus.TODO)
    state.update_status(task.id, TaskStatus.COMPLETED)

    unlocked = [e.badge_id for e in recorder.of_type(AchievementUnlocked)]
    assert unlocked.count("first-task") == 1
    assert "first-task" in state.engine.profile.badges
    assert state.engine.check_achievements() == []


def test_legendary_badge(state: AppState) -> None:
    _complete(state, "normal", "high")
    assert "legendary" not in state.engine.profile.badges

    _complete(state, "epic", "legendary")
    assert "legendary" in state.engine.profile.badges


def test_power_user_needs_ten_completions_today(state: AppState, clock: FakeClock) -> None:
    for i in range(9):
        _complete(state, f"t{i}", "low")
    assert "power-user" not in state.engine.profile.badges

    _complete(state, "t9", "low")
    assert "power-user" in state.engine.profile.badges


def test_power_user_ignores_other_days(state: AppState, clock: FakeClock) -> None:
    for i in range(5):
        _complete(state, f"y{i}", "low")
    clock.advance(days=1)
    for i in range(5):
        _complete(state, f"t{i}", "low")
    assert "power-user" not in state.engine.profile.badges


def test_streak_three_badge(state: AppState, clock: FakeClock) -> None:
    p = state.engine.profile
    p.streak = 2
    p.last_activity = clock.now().date() - timedelta(days=1)

    _complete(state, "keeps the fire going")

    assert p.streak == 3
    assert "streak-3" in p.badges


def test_badges_keep_unlock_order(state: AppState) -> None:
    _complete(state, "epic", "legendary")
    assert state.engine.profile.badges.to_list() == ["first-task", "legendary"]


def test_reset_all(state: AppState, recorder: EventRecorder) -> None:
    for i in range(12):
        _complete(state, f"t{i}", "legendary")
    p = state.engine.profile
    assert p.level > 1 and len(p.badges) > 0

    state.reset_all()

    p = state.engine.profile
    assert (p.level, p.xp, p.streak, p.total_points) == (1, 0, 0, 0)
    assert len(p.badges) == 0
    assert p.last_activity is None
    assert p.name == "Tester"
    assert state.task_store.list_tasks() == []
    assert len(recorder.of_type(ProfileReset)) == 1


def test_mood(state: AppState, recorder: EventRecorder) -> None:
    engine = state.engine
    assert engine.profile.mood == Mood.FOCUSED

    assert engine.cycle_mood() == Mood.CREATIVE
    assert engine.set_mood("calm") == Mood.CALM
    assert engine.cycle_mood() == Mood.FOCUSED

    with pytest.raises(ValidationError):
        engine.set_mood("grumpy")
    assert engine.profile.mood == Mood.FOCUSED
    assert [e.mood for e in recorder.of_type(MoodChanged)] == ["creative", "calm", "focused"]


def test_level_progress(state: AppState) -> None:
    state.engine.award_xp(40)
    assert state.engine.level_progress() == (40, 100)


def test_engine_module_is_documented() -> None:
    import taskflow.game.engine as engine_mod

    assert (engine_mod.__doc__ or "").strip().startswith("Gamification rules")
