# tests/test_commands.py

from __future__ import annotations

from taskflow.cli.commands import CommandRegistry, registry
from taskflow.core.events import TaskEdited
from taskflow.core.state import AppState
from taskflow.tasks.task_models import Category, Priority, TaskStatus

from .fakes import MemoryGateway


def test_command_registry_routes_2_and_3_params(state: AppState) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}
    notes: list[str] = []

    def h2(state, args):
        called["h2"] += 1
        return "h2:" + ",".join(args)

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a", aliases=["aa"])
    reg.register("b", h3, "b")

    assert reg.handle(state, "/a x y") == "h2:x,y"
    assert reg.handle(state, "/AA") == "h2:"
    assert reg.handle(state, "/b", emit=notes.append) == "h3"
    assert called == {"h2": 2, "h3": 1}
    assert notes == ["note"]


def test_command_registry_unknown_and_non_command(state: AppState) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_help_lists_commands(state: AppState) -> None:
    text = registry.handle(state, "/help") or ""
    for name in ("/add", "/done", "/focus", "/export", "/reset"):
        assert name in text


def test_add_parses_priority_and_category(state: AppState) -> None:
    reply = registry.handle(state, "/add Finish the slides !high #creative") or ""

    task = state.task_store.list_tasks()[0]
    assert task.title == "Finish the slides"
    assert task.priority == Priority.HIGH
    assert task.category == Category.CREATIVE
    assert "+35 XP" in reply


def test_task_lifecycle_by_position(state: AppState) -> None:
    registry.handle(state, "/add one")
    registry.handle(state, "/add two !legendary")

    registry.handle(state, "/start 2")
    assert state.task_store.list_tasks()[1].status == TaskStatus.PROGRESS

    registry.handle(state, "/done 2")
    assert state.engine.profile.xp == 50
    assert "legendary" in state.engine.profile.badges

    registry.handle(state, "/edit 1 one renamed")
    assert state.task_store.list_tasks()[0].title == "one renamed"

    listing = registry.handle(state, "/list completed") or ""
    assert "two" in listing and "one renamed" not in listing

    registry.handle(state, "/del 1")
    assert [t.title for t in state.task_store.list_tasks()] == ["two"]


def test_unknown_task_reference(state: AppState) -> None:
    assert "No task" in (registry.handle(state, "/done 7") or "")
    assert (registry.handle(state, "/done") or "").startswith("Usage")


def test_stats_and_profile(state: AppState) -> None:
    registry.handle(state, "/add a !low")
    registry.handle(state, "/done 1")

    stats = registry.handle(state, "/stats") or ""
    assert "Completed: 1" in stats
    assert "Points: 10" in stats

    profile = registry.handle(state, "/profile") or ""
    assert "Tester" in profile
    assert "10 / 100 XP" in profile


def test_focus_commands(state: AppState, ticker) -> None:
    assert "25:00" in (registry.handle(state, "/focus") or "")
    registry.handle(state, "/focus start")
    ticker.fire(30)
    assert "24:30" in (registry.handle(state, "/focus pause") or "")
    assert "not running" in (registry.handle(state, "/focus pause") or "")
    assert "25:00" in (registry.handle(state, "/focus reset") or "")


def test_reset_requires_confirmation(state: AppState) -> None:
    registry.handle(state, "/add keep me")
    notes: list[str] = []

    assert "/reset yes" in (registry.handle(state, "/reset", emit=notes.append) or "")
    assert state.task_store.count_tasks() == 1
    assert notes == []

    registry.handle(state, "/reset yes", emit=notes.append)
    assert state.task_store.count_tasks() == 0
    assert len(notes) == 1


def test_sample_suggest_and_save(state: AppState, gateway: MemoryGateway) -> None:
    assert "6 sample quests" in (registry.handle(state, "/sample") or "")
    assert state.task_store.count_tasks() == 6

    assert "Plan tomorrow" in (registry.handle(state, "/suggest plan") or "")
    assert "No suggestions" in (registry.handle(state, "/suggest ab") or "")

    assert registry.handle(state, "/save") == "Saved."
    assert gateway.saves == 1
    assert len(gateway.data["tasks"]) == 6


def test_export_command(state: AppState, tmp_path) -> None:
    reply = registry.handle(state, f"/export {tmp_path}") or ""
    assert "taskflow-export-2026-03-10.json" in reply
    assert (tmp_path / "taskflow-export-2026-03-10.json").exists()


def test_edit_with_same_title_reports_no_change(state: AppState, recorder) -> None:
    registry.handle(state, "/add Water plants")

    reply = registry.handle(state, "/edit 1 Water plants") or ""

    assert reply.startswith("Nothing changed")
    assert recorder.of_type(TaskEdited) == []
    assert "Quest updated" in (registry.handle(state, "/edit 1 Water the plants") or "")
    assert len(recorder.of_type(TaskEdited)) == 1
