# src/taskflow/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..cli.bootstrap import save_snapshot
from ..core.state import AppState
from ..errors import PersistenceError
from ..game.achievements import BADGE_RULES
from ..game.motivation import random_quote
from ..storage.export import write_export
from ..tasks.task_api import add_sample_tasks, suggest_titles, time_ago
from ..tasks.task_models import Category, Priority, Task, TaskStatus

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- helpers ----


def _resolve_task(state: AppState, ref: str) -> Task | None:
    """A task is addressed by its 1-based position in /list or by its id."""
    tasks = state.task_store.list_tasks()
    if ref.isdigit():
        idx = int(ref) - 1
        return tasks[idx] if 0 <= idx < len(tasks) else None
    return state.task_store.get(ref)


def _format_task(state: AppState, index: int, task: Task) -> str:
    mark = {TaskStatus.TODO: "[ ]", TaskStatus.PROGRESS: "[~]", TaskStatus.COMPLETED: "[x]"}[task.status]
    age = time_ago(task.created_at, state.clock.now())
    return f"{index:>2}. {mark} {task.title} ({task.priority.value}, {task.category.value}, +{task.points} XP, created {age})"


def _parse_add_args(args: list[str]) -> tuple[str, str, str]:
    priority = Priority.MEDIUM.value
    category = Category.WORK.value
    words: list[str] = []
    for a in args:
        if a.startswith("!") and len(a) > 1:
            priority = a[1:]
        elif a.startswith("#") and len(a) > 1:
            category = a[1:]
        else:
            words.append(a)
    return " ".join(words), priority, category


def _move(state: AppState, args: list[str], status: TaskStatus, usage: str) -> str:
    if not args:
        return usage
    task = _resolve_task(state, args[0])
    if task is None:
        return f"No task {args[0]!r}. Use /list to see task numbers."
    state.update_status(task.id, status)
    return f"{task.title} -> {task.status.value}"


# ---- commands ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    """/add <title> [!low|!medium|!high|!legendary] [#work|#personal|...]"""
    title, priority, category = _parse_add_args(args)
    task = state.add_task(title, priority, category)
    return f"New {task.priority.value} quest added: {task.title} (+{task.points} XP)"


def cmd_start(state: AppState, args: list[str]) -> str:
    return _move(state, args, TaskStatus.PROGRESS, "Usage: /start <n>")


def cmd_done(state: AppState, args: list[str]) -> str:
    return _move(state, args, TaskStatus.COMPLETED, "Usage: /done <n>")


def cmd_todo(state: AppState, args: list[str]) -> str:
    return _move(state, args, TaskStatus.TODO, "Usage: /todo <n>")


def cmd_edit(state: AppState, args: list[str]) -> str:
    if len(args) < 2:
        return "Usage: /edit <n> <new title>"
    task = _resolve_task(state, args[0])
    if task is None:
        return f"No task {args[0]!r}. Use /list to see task numbers."
    new_title = " ".join(args[1:]).strip()
    if new_title == task.title:
        return f"Nothing changed: {task.title}"
    state.edit_task(task.id, new_title)
    return f"Quest updated: {task.title}"


def cmd_delete(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /del <n>"
    task = _resolve_task(state, args[0])
    if task is None:
        return f"No task {args[0]!r}. Use /list to see task numbers."
    state.delete_task(task.id)
    return f"Quest removed: {task.title}"


def cmd_list(state: AppState, args: list[str]) -> str:
    """
    /list              -> every task
    /list <status>     -> only todo / progress / completed
    """
    wanted = TaskStatus.parse(args[0]) if args else None
    if args and wanted is None:
        return "Usage: /list [todo|progress|completed]"

    tasks = state.task_store.list_tasks()
    if not tasks:
        return "Your board is empty. Add your first quest with /add <title>."

    lines = [_format_task(state, i, t) for i, t in enumerate(tasks, start=1) if wanted is None or t.status == wanted]
    return "\n".join(lines) if lines else f"No {wanted} tasks."


def cmd_stats(state: AppState, args: list[str]) -> str:
    s = state.task_store.stats()
    return (
        "Board:\n"
        f"  Total: {s.total}\n"
        f"  To do: {s.todo}\n"
        f"  In progress: {s.in_progress}\n"
        f"  Completed: {s.completed}\n"
        f"  Points: {s.total_points}"
    )


def cmd_profile(state: AppState, args: list[str]) -> str:
    p = state.engine.profile
    xp, threshold = state.engine.level_progress()
    return (
        f"{p.name}\n"
        f"  Level: {p.level} ({xp} / {threshold} XP)\n"
        f"  Streak: {p.streak} day(s)\n"
        f"  Total points: {p.total_points}\n"
        f"  Badges: {len(p.badges)}/{len(BADGE_RULES)}\n"
        f"  Mood: {p.mood.value}"
    )


def cmd_badges(state: AppState, args: list[str]) -> str:
    lines = ["Achievements:"]
    for rule in BADGE_RULES:
        mark = "*" if rule.id in state.engine.profile.badges else " "
        lines.append(f"  [{mark}] {rule.title} - {rule.description}")
    return "\n".join(lines)


def cmd_focus(state: AppState, args: list[str]) -> str:
    """
    /focus            -> show timer
    /focus start      -> start/resume countdown
    /focus pause      -> pause, keep remaining time
    /focus reset      -> pause and rewind the current phase
    """
    sub = args[0].lower() if args else "status"
    timer = state.timer

    if sub == "start":
        if timer.is_active:
            return "Focus session is already running."
        state.start_session()
        return f"Focus {timer.phase.value} started: {timer.format_remaining()} left."
    if sub == "pause":
        if not timer.is_active:
            return "Focus session is not running."
        state.pause_session()
        return f"Focus paused at {timer.format_remaining()}."
    if sub == "reset":
        state.reset_session()
        return f"Focus reset: {timer.format_remaining()} ({timer.phase.value})."
    if sub == "status":
        running = "running" if timer.is_active else "paused"
        return f"Focus {timer.phase.value} {running}: {timer.format_remaining()} left ({timer.progress():.0%} done)."

    return "Usage: /focus [start|pause|reset|status]"


def cmd_mood(state: AppState, args: list[str]) -> str:
    if not args or args[0].lower() == "next":
        mood = state.engine.cycle_mood()
    else:
        mood = state.engine.set_mood(args[0])
    return f"Mood set to {mood.value}!"


def cmd_sample(state: AppState, args: list[str]) -> str:
    added = add_sample_tasks(state)
    return f"{len(added)} sample quests added to your board!"


def cmd_suggest(state: AppState, args: list[str]) -> str:
    found = suggest_titles(" ".join(args))
    if not found:
        return "No suggestions (type at least 3 characters)."
    return "Suggestions:\n" + "\n".join(f"  - {s}" for s in found)


def cmd_quote(state: AppState, args: list[str]) -> str:
    return random_quote()


def cmd_export(state: AppState, args: list[str]) -> str:
    directory = args[0] if args else getattr(state.settings, "export_dir", ".")
    try:
        path = write_export(state, directory)
    except PersistenceError as e:
        return f"Export failed: {e}"
    return f"Tasks exported to {path}"


def cmd_save(state: AppState, args: list[str]) -> str:
    return "Saved." if save_snapshot(state) else "Nothing saved (storage unavailable, see log)."


def cmd_reset(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/reset yes -> wipe every task and all progress (the name is kept)."""
    if not args or args[0].lower() not in ("yes", "y", "confirm"):
        return "This wipes every task, level, streak and badge. Use /reset yes to confirm."
    if emit:
        emit("Resetting your TaskFlow universe...")
    state.reset_all()
    return "TaskFlow universe reset! Ready for a fresh start!"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task: /add <title> [!priority] [#category].", aliases=["a"])
registry.register("start", cmd_start, help_text="Move a task to in progress: /start <n>.")
registry.register("done", cmd_done, help_text="Complete a task: /done <n>.", aliases=["complete"])
registry.register("todo", cmd_todo, help_text="Move a task back to todo (pause or redo): /todo <n>.", aliases=["redo"])
registry.register("edit", cmd_edit, help_text="Rename a task: /edit <n> <title>.")
registry.register("del", cmd_delete, help_text="Delete a task: /del <n>.", aliases=["rm"])
registry.register("list", cmd_list, help_text="List tasks: /list [todo|progress|completed].", aliases=["ls"])
registry.register("stats", cmd_stats, help_text="Board statistics.")
registry.register("profile", cmd_profile, help_text="Level, XP, streak and badges.", aliases=["me"])
registry.register("badges", cmd_badges, help_text="Achievement list.")
registry.register("focus", cmd_focus, help_text="Focus timer: /focus [start|pause|reset|status].", aliases=["pomodoro"])
registry.register("mood", cmd_mood, help_text="Set mood: /mood [focused|creative|energetic|calm|next].")
registry.register("sample", cmd_sample, help_text="Add sample quests.")
registry.register("suggest", cmd_suggest, help_text="Title ideas: /suggest <text>.")
registry.register("quote", cmd_quote, help_text="A motivational quote.")
registry.register("export", cmd_export, help_text="Export tasks and profile as JSON: /export [dir].")
registry.register("save", cmd_save, help_text="Save now.")
registry.register("reset", cmd_reset, help_text="Wipe everything: /reset yes.")
