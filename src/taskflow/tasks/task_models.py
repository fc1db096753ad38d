# src/taskflow/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Every status may move to every other one (todo <-> progress <-> completed,
    completed -> todo is the "redo" path). Entering COMPLETED is what pays out.
    """

    TODO = "todo"
    PROGRESS = "progress"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, raw: str | None) -> TaskStatus | None:
        if not raw:
            return None
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return None


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    LEGENDARY = "legendary"

    @classmethod
    def parse(cls, raw: str | None) -> Priority | None:
        if not raw:
            return None
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return None


class Category(StrEnum):
    WORK = "work"
    PERSONAL = "personal"
    CREATIVE = "creative"
    HEALTH = "health"
    LEARNING = "learning"
    FUN = "fun"

    @classmethod
    def parse(cls, raw: str | None) -> Category | None:
        if not raw:
            return None
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return None


POINTS_BY_PRIORITY: dict[Priority, int] = {
    Priority.LOW: 10,
    Priority.MEDIUM: 20,
    Priority.HIGH: 35,
    Priority.LEGENDARY: 50,
}
DEFAULT_POINTS = 20


def points_for(priority: Priority | str | None) -> int:
    """Point value of a priority; anything unrecognized is worth DEFAULT_POINTS."""
    parsed = priority if isinstance(priority, Priority) else Priority.parse(priority)
    if parsed is None:
        return DEFAULT_POINTS
    return POINTS_BY_PRIORITY.get(parsed, DEFAULT_POINTS)


@dataclass(slots=True)
class Task:
    id: str
    title: str
    priority: Priority
    category: Category
    status: TaskStatus
    created_at: datetime
    points: int

    # Set on every transition into COMPLETED, never cleared afterwards.
    completed_at: datetime | None = None
    time_spent: int = 0

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED


@dataclass(slots=True, frozen=True)
class BoardStats:
    total: int
    todo: int
    in_progress: int
    completed: int
    total_points: int
