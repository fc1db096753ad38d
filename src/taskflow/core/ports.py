# src/taskflow/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
Clock, ticker and storage stay swappable, and tests can drive time by hand.
"""

from collections.abc import Callable
from datetime import date, datetime
from typing import Any, Protocol


class Clock(Protocol):
    """The single source of "now" for the core (timezone-aware, local time)."""

    def now(self) -> datetime: ...


class TickerHandle(Protocol):
    """An active repeating subscription. cancel() must be idempotent."""

    def cancel(self) -> None: ...


class Ticker(Protocol):
    """Schedules a callback every `interval` seconds until the handle is cancelled."""

    def schedule_repeating(self, interval: float, callback: Callable[[], None]) -> TickerHandle: ...


class EventPublisher(Protocol):
    def publish(self, event: Any) -> None: ...


class TaskReader(Protocol):
    """Read-only view of the task collection (what the gamification engine may see)."""

    def completed_tasks(self) -> list[Any]: ...
    def completed_on(self, day: date) -> list[Any]: ...


class PersistenceGateway(Protocol):
    """
    Durable snapshot storage.

    load() returns None when nothing was stored yet and raises PersistenceError
    when the stored data cannot be read back.
    """

    def save(self, snapshot: dict[str, Any]) -> None: ...
    def load(self) -> dict[str, Any] | None: ...
