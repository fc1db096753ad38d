# src/taskflow/core/state.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ..focus.timer import FocusSessionTimer
from ..game.engine import GamificationEngine
from ..storage.snapshot import AppSnapshot
from ..tasks.task_models import Category, Priority, Task, TaskStatus
from ..tasks.task_store import TaskStore
from .events import EventBus
from .ports import Clock, PersistenceGateway, Ticker

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    """
    The owned aggregate: one per running app, passed to whoever issues commands.

    The methods below are the command surface; each delegates to the component
    that owns the data it changes.
    """

    settings: Any
    events: EventBus
    clock: Clock
    task_store: TaskStore
    engine: GamificationEngine
    timer: FocusSessionTimer
    gateway: PersistenceGateway | None = None

    # ---- tasks ----

    def add_task(self, title: str, priority: Priority | str = Priority.MEDIUM, category: Category | str = Category.WORK) -> Task:
        return self.task_store.add_task(title, priority, category)

    def update_status(self, task_id: str, new_status: TaskStatus | str) -> None:
        self.task_store.update_status(task_id, new_status)

    def delete_task(self, task_id: str) -> None:
        self.task_store.delete_task(task_id)

    def edit_task(self, task_id: str, new_title: str) -> None:
        self.task_store.edit_task(task_id, new_title)

    # ---- focus sessions ----

    def start_session(self) -> None:
        self.timer.start()

    def pause_session(self) -> None:
        self.timer.pause()

    def reset_session(self) -> None:
        self.timer.reset()

    # ---- whole state ----

    def reset_all(self) -> None:
        """Wipe every task and the profile progress (the profile name survives)."""
        self.task_store.clear()
        self.engine.reset_profile()
        logger.info("All tasks and progress reset.")

    def snapshot(self) -> AppSnapshot:
        return AppSnapshot(
            tasks=self.task_store.list_tasks(),
            profile=self.engine.profile,
            focus=self.timer.snapshot(),
        )

    def restore(self, snapshot: AppSnapshot) -> None:
        self.task_store.replace_all(snapshot.tasks)
        self.engine.restore_profile(snapshot.profile)
        if snapshot.focus is not None:
            self.timer.restore(snapshot.focus)
        # total points are derived from the tasks, not trusted from storage
        self.engine.profile.total_points = self.task_store.stats().total_points


def build_app_state(
    settings: Any,
    *,
    clock: Clock,
    ticker: Ticker,
    gateway: PersistenceGateway | None = None,
    events: EventBus | None = None,
) -> AppState:
    """Wire the core components together. No I/O happens here."""
    bus = events if events is not None else EventBus()

    task_store = TaskStore(clock=clock, events=bus)
    engine = GamificationEngine(
        tasks=task_store,
        clock=clock,
        events=bus,
        focus_bonus_xp=int(getattr(settings, "focus_bonus_xp", 25)),
    )
    engine.profile.name = str(getattr(settings, "profile_name", engine.profile.name) or engine.profile.name)
    engine.subscribe_to(bus)

    timer = FocusSessionTimer(
        ticker=ticker,
        events=bus,
        work_seconds=int(getattr(settings, "work_minutes", 25)) * 60,
        break_seconds=int(getattr(settings, "break_minutes", 5)) * 60,
        tick_seconds=float(getattr(settings, "tick_seconds", 1.0)),
    )

    return AppState(
        settings=settings,
        events=bus,
        clock=clock,
        task_store=task_store,
        engine=engine,
        timer=timer,
        gateway=gateway,
    )
