# src/taskflow/tasks/task_store.py

from __future__ import annotations

import logging
import secrets
import string
from collections.abc import Iterable
from datetime import date, datetime, tzinfo

from ..core.events import TaskAdded, TaskCompleted, TaskDeleted, TaskEdited, TaskStatusChanged
from ..core.ports import Clock, EventPublisher
from ..errors import ValidationError
from .task_models import BoardStats, Category, Priority, Task, TaskStatus, points_for

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits


class TaskStore:
    """
    In-memory owner of the task collection.

    Rules enforced here:
    - titles are trimmed and never empty
    - points are fixed from the priority at creation time
    - completed_at is stamped on every transition into COMPLETED and kept afterwards
    - operations on unknown ids are silent no-ops

    Durability is not handled here: the whole collection is snapshotted by the
    persistence gateway (see storage/).
    """

    def __init__(self, *, clock: Clock, events: EventPublisher) -> None:
        self._clock = clock
        self._events = events
        # dict keeps insertion order, which is the board order
        self._tasks: dict[str, Task] = {}

    def __len__(self) -> int:
        return len(self._tasks)

    # ---- low-level helpers ----

    def _new_id(self) -> str:
        stamp = int(self._clock.now().timestamp() * 1000)
        while True:
            token = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
            task_id = f"task_{stamp}_{token}"
            if task_id not in self._tasks:
                return task_id

    @staticmethod
    def _clean_title(raw: str | None, *, field: str = "title") -> str:
        title = (raw or "").strip()
        if not title:
            raise ValidationError(field, "Task title must not be empty.")
        return title

    # ---- public API ----

    def count_tasks(self) -> int:
        return len(self._tasks)

    def get(self, task_id: str) -> Task | None:
        return self._tasks.get(task_id)

    def list_tasks(self, status: TaskStatus | None = None) -> list[Task]:
        if status is None:
            return list(self._tasks.values())
        return [t for t in self._tasks.values() if t.status == status]

    def completed_tasks(self) -> list[Task]:
        return self.list_tasks(TaskStatus.COMPLETED)

    def completed_on(self, day: date) -> list[Task]:
        """Tasks currently completed whose completion timestamp falls on `day`."""
        return [
            t
            for t in self._tasks.values()
            if t.status == TaskStatus.COMPLETED and t.completed_at is not None and t.completed_at.date() == day
        ]

    def add_task(
        self,
        title: str,
        priority: Priority | str = Priority.MEDIUM,
        category: Category | str = Category.WORK,
    ) -> Task:
        clean = self._clean_title(title)

        prio = priority if isinstance(priority, Priority) else Priority.parse(priority)
        if prio is None:
            logger.warning("Unknown priority %r, using %s", priority, Priority.MEDIUM.value)
            prio = Priority.MEDIUM

        cat = category if isinstance(category, Category) else Category.parse(category)
        if cat is None:
            logger.warning("Unknown category %r, using %s", category, Category.WORK.value)
            cat = Category.WORK

        task = Task(
            id=self._new_id(),
            title=clean,
            priority=prio,
            category=cat,
            status=TaskStatus.TODO,
            created_at=self._clock.now(),
            points=points_for(prio),
        )
        self._tasks[task.id] = task
        logger.debug("Task added id=%s priority=%s points=%s", task.id, prio.value, task.points)

        self._events.publish(TaskAdded(task))
        return task

    def update_status(self, task_id: str, new_status: TaskStatus | str) -> None:
        task = self._tasks.get(task_id)
        if task is None:
            logger.debug("update_status: unknown task id=%s", task_id)
            return

        status = new_status if isinstance(new_status, TaskStatus) else TaskStatus.parse(new_status)
        if status is None:
            logger.warning("update_status: unknown status %r for task id=%s", new_status, task_id)
            return

        old_status = task.status
        if status == old_status:
            return

        task.status = status
        logger.info("Task %s %s -> %s", task_id, old_status.value, status.value)

        # Not idempotent per task: a redo cycle pays out again.
        if status == TaskStatus.COMPLETED:
            task.completed_at = self._clock.now()
            self._events.publish(TaskCompleted(task))

        self._events.publish(TaskStatusChanged(task, old_status, status))

    def delete_task(self, task_id: str) -> None:
        task = self._tasks.pop(task_id, None)
        if task is None:
            logger.debug("delete_task: unknown task id=%s", task_id)
            return
        logger.info("Task deleted id=%s", task_id)
        self._events.publish(TaskDeleted(task))

    def edit_task(self, task_id: str, new_title: str) -> None:
        clean = self._clean_title(new_title)

        task = self._tasks.get(task_id)
        if task is None:
            logger.debug("edit_task: unknown task id=%s", task_id)
            return
        if clean == task.title:
            return

        old_title = task.title
        task.title = clean
        self._events.publish(TaskEdited(task, old_title))

    def stats(self) -> BoardStats:
        tasks = list(self._tasks.values())
        completed = [t for t in tasks if t.status == TaskStatus.COMPLETED]
        return BoardStats(
            total=len(tasks),
            todo=sum(1 for t in tasks if t.status == TaskStatus.TODO),
            in_progress=sum(1 for t in tasks if t.status == TaskStatus.PROGRESS),
            completed=len(completed),
            total_points=sum(t.points for t in completed),
        )

    def clear(self) -> None:
        self._tasks.clear()

    def replace_all(self, tasks: Iterable[Task]) -> None:
        """
        Swap in a restored collection. Publishes nothing: restoring is not gameplay.

        Stored timestamps may carry any offset (older data is UTC with a "Z");
        they are moved to the clock's timezone so date comparisons use local days.
        """
        tz = self._clock.now().tzinfo
        restored: dict[str, Task] = {}
        for t in tasks:
            t.created_at = self._to_tz(t.created_at, tz)
            if t.completed_at is not None:
                t.completed_at = self._to_tz(t.completed_at, tz)
            restored[t.id] = t
        self._tasks = restored
        logger.info("TaskStore restored total=%s", len(self._tasks))

    @staticmethod
    def _to_tz(dt: datetime, tz: tzinfo | None) -> datetime:
        try:
            return dt.astimezone(tz)
        except (OverflowError, ValueError):
            return dt
