# src/taskflow/tasks/task_api.py

from __future__ import annotations

import logging
from datetime import datetime
from typing import Final

from ..core.state import AppState
from .task_models import Category, Priority, Task

logger = logging.getLogger(__name__)

SAMPLE_TASKS: Final[tuple[tuple[str, Priority, Category], ...]] = (
    ("Review quarterly project goals", Priority.HIGH, Category.WORK),
    ("Learn new Python framework", Priority.MEDIUM, Category.LEARNING),
    ("Morning workout routine", Priority.MEDIUM, Category.HEALTH),
    ("Write creative short story", Priority.LOW, Category.CREATIVE),
    ("Plan weekend adventure", Priority.LOW, Category.FUN),
    ("Master productivity system", Priority.LEGENDARY, Category.PERSONAL),
)

TITLE_SUGGESTIONS: Final[tuple[str, ...]] = (
    "Review project documentation for clarity",
    "Organize workspace for better focus",
    "Take a 10-minute energizing break",
    "Plan tomorrow's priority tasks",
    "Celebrate today's accomplishments",
)


def add_sample_tasks(state: AppState) -> list[Task]:
    """
    Convenience helper: put the demo quests on the board.
    Goes through the normal add path, so TaskAdded fires for each one.
    """
    added = [state.add_task(title, priority, category) for title, priority, category in SAMPLE_TASKS]
    logger.info("Added %d sample tasks", len(added))
    return added


def suggest_titles(text: str, limit: int = 3) -> list[str]:
    """Case-insensitive substring match over TITLE_SUGGESTIONS; needs more than 2 characters."""
    needle = (text or "").strip().lower()
    if len(needle) <= 2:
        return []
    return [s for s in TITLE_SUGGESTIONS if needle in s.lower()][: max(0, limit)]


def time_ago(then: datetime, now: datetime) -> str:
    seconds = (now - then).total_seconds()
    minutes = int(seconds // 60)
    hours = int(seconds // 3600)
    days = int(seconds // 86400)

    if minutes < 1:
        return "just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    if days == 1:
        return "yesterday"
    if days < 7:
        return f"{days}d ago"
    return then.date().isoformat()
