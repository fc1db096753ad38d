# src/taskflow/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime

from ..cli.bootstrap import save_snapshot
from ..cli.commands import registry as command_registry
from ..core import events as ev
from ..core.state import AppState
from ..errors import TaskFlowError
from ..focus.focus_models import FocusPhase
from ..game.motivation import random_quote

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


def describe_event(event: object) -> str | None:
    """User-facing line for an event, or None for events that are not worth showing."""
    if isinstance(event, ev.TaskCompleted):
        return f"Quest completed! +{event.task.points} XP"
    if isinstance(event, ev.LevelUp):
        return f"LEVEL UP! You are now Level {event.new_level}!"
    if isinstance(event, ev.StreakUpdated) and event.streak > 1:
        return f"Streak maintained! {event.streak} days strong!"
    if isinstance(event, ev.AchievementUnlocked):
        return f"Achievement Unlocked: {event.title} ({event.badge_id})"
    if isinstance(event, ev.SessionCompleted):
        if event.phase == FocusPhase.WORK:
            return "Focus session complete! Take a break!"
        return "Break time over! Ready for another productive session?"
    if isinstance(event, ev.PersistenceWarning):
        return f"[WARN] {event.message}"
    return None


def attach_event_printer(state: AppState, out: Callable[[str], None] = _print_ts) -> Callable[[], None]:
    def _on_event(event: object) -> None:
        line = describe_event(event)
        if line:
            out(line)

    return state.events.subscribe(_on_event)


async def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Type /help for commands, /exit to quit.")
    if not state.task_store.count_tasks():
        _print_ts("Welcome to TaskFlow! Add your first epic quest with /add <title> to begin.")
    else:
        _print_ts(random_quote())

    autosave = bool(getattr(state.settings, "autosave", True))

    def emit(text: str) -> None:
        _print_ts(text)

    while True:
        try:
            # input() blocks, so it runs in a worker thread; commands run back here on the loop.
            user_input = (await asyncio.to_thread(input, ">>> ")).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        if not user_input.startswith("/"):
            # Plain text is a shortcut for /add.
            user_input = f"/add {user_input}"

        try:
            response = command_registry.handle(state, user_input, emit=emit)
        except TaskFlowError as e:
            response = str(e)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        if response is not None:
            _print_ts(response)

        if autosave:
            save_snapshot(state)

    logger.info("Console connector finished.")
