# tests/fakes.py

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from taskflow.errors import PersistenceError


class FakeClock:
    """Settable clock; time only moves when a test says so."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current = self.current + timedelta(**kwargs)


@dataclass(slots=True)
class ManualHandle:
    interval: float
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass(slots=True)
class ManualTicker:
    """
    Ticker driven by hand: fire(n) runs every live subscription n times.
    """

    subscriptions: list[ManualHandle] = field(default_factory=list)

    def schedule_repeating(self, interval: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(interval, callback)
        self.subscriptions.append(handle)
        return handle

    @property
    def active(self) -> list[ManualHandle]:
        return [h for h in self.subscriptions if not h.cancelled]

    def fire(self, times: int = 1) -> None:
        for _ in range(times):
            for handle in self.active:
                handle.callback()


@dataclass(slots=True)
class MemoryGateway:
    """In-memory PersistenceGateway; set `broken` to simulate unreadable storage."""

    data: dict[str, Any] | None = None
    broken: bool = False
    saves: int = 0

    def save(self, snapshot: dict[str, Any]) -> None:
        self.data = snapshot
        self.saves += 1

    def load(self) -> dict[str, Any] | None:
        if self.broken:
            raise PersistenceError("corrupted storage")
        return self.data


@dataclass(slots=True)
class EventRecorder:
    events: list[Any] = field(default_factory=list)

    def __call__(self, event: Any) -> None:
        self.events.append(event)

    def of_type(self, event_type: type) -> list[Any]:
        return [e for e in self.events if isinstance(e, event_type)]
