# src/taskflow/core/events.py

"""
Domain events and the in-process event bus.

The core never talks to the presentation layer directly: TaskStore, FocusSessionTimer
and GamificationEngine publish the events below and whoever cares subscribes.

Dispatch is synchronous: every handler runs to completion, in subscription order,
before publish() returns. A task completion's XP award and badge checks are therefore
visible to the caller as soon as update_status() returns.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..focus.focus_models import FocusPhase
from ..tasks.task_models import Task, TaskStatus

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class TaskAdded:
    task: Task


@dataclass(slots=True, frozen=True)
class TaskCompleted:
    task: Task


@dataclass(slots=True, frozen=True)
class TaskStatusChanged:
    task: Task
    old_status: TaskStatus
    new_status: TaskStatus


@dataclass(slots=True, frozen=True)
class TaskDeleted:
    task: Task


@dataclass(slots=True, frozen=True)
class TaskEdited:
    task: Task
    old_title: str


@dataclass(slots=True, frozen=True)
class LevelUp:
    new_level: int


@dataclass(slots=True, frozen=True)
class StreakUpdated:
    streak: int


@dataclass(slots=True, frozen=True)
class AchievementUnlocked:
    badge_id: str
    title: str


@dataclass(slots=True, frozen=True)
class SessionStarted:
    phase: FocusPhase
    remaining: int


@dataclass(slots=True, frozen=True)
class SessionPaused:
    phase: FocusPhase
    remaining: int


@dataclass(slots=True, frozen=True)
class SessionReset:
    phase: FocusPhase
    duration: int


@dataclass(slots=True, frozen=True)
class SessionCompleted:
    # The phase that just ended, not the one the timer switched to.
    phase: FocusPhase


@dataclass(slots=True, frozen=True)
class ProfileReset:
    name: str


@dataclass(slots=True, frozen=True)
class MoodChanged:
    mood: str


@dataclass(slots=True, frozen=True)
class PersistenceWarning:
    message: str


EventHandler = Callable[[Any], None]


class EventBus:
    """Synchronous in-memory pub/sub."""

    def __init__(self) -> None:
        self._subscriptions: list[tuple[tuple[type, ...], EventHandler]] = []
        self.events_published = 0

    def subscribe(self, handler: EventHandler, *event_types: type) -> Callable[[], None]:
        """
        Register handler for the given event types (all events if none given).

        Returns an unsubscribe callable; calling it twice is harmless.
        """
        entry = (tuple(event_types), handler)
        self._subscriptions.append(entry)

        def _unsubscribe() -> None:
            with contextlib.suppress(ValueError):
                self._subscriptions.remove(entry)

        return _unsubscribe

    def publish(self, event: Any) -> None:
        self.events_published += 1
        logger.debug("Event %s", type(event).__name__)
        for types, handler in list(self._subscriptions):
            if types and not isinstance(event, types):
                continue
            handler(event)
