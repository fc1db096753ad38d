# src/taskflow/focus/timer.py

"""
Focus session timer (work/break countdown).

States:
- idle/paused: is_active=False, remaining kept
- running:     is_active=True, one active ticker subscription

pause() and reset() tear the subscription down before touching anything else,
so a stale tick can never resume a paused session. tick() also ignores calls
while inactive.
"""

from __future__ import annotations

import logging

from ..core.events import SessionCompleted, SessionPaused, SessionReset, SessionStarted
from ..core.ports import EventPublisher, Ticker, TickerHandle
from .focus_models import FocusPhase, FocusSnapshot

logger = logging.getLogger(__name__)

DEFAULT_WORK_SECONDS = 25 * 60
DEFAULT_BREAK_SECONDS = 5 * 60


class FocusSessionTimer:
    def __init__(
        self,
        *,
        ticker: Ticker,
        events: EventPublisher,
        work_seconds: int = DEFAULT_WORK_SECONDS,
        break_seconds: int = DEFAULT_BREAK_SECONDS,
        tick_seconds: float = 1.0,
    ) -> None:
        self._ticker = ticker
        self._events = events
        self.work_seconds = max(1, int(work_seconds))
        self.break_seconds = max(1, int(break_seconds))
        self.tick_seconds = max(0.01, float(tick_seconds))

        self.phase = FocusPhase.WORK
        self.duration = self.work_seconds
        self.remaining = self.duration
        self.is_active = False
        self._subscription: TickerHandle | None = None

    # ---- commands ----

    def start(self) -> None:
        if self.is_active:
            return
        self._cancel_subscription()
        self.is_active = True
        self._subscription = self._ticker.schedule_repeating(self.tick_seconds, self.tick)
        logger.info("Focus %s started remaining=%s", self.phase.value, self.remaining)
        self._events.publish(SessionStarted(self.phase, self.remaining))

    def pause(self) -> None:
        if not self.is_active:
            return
        self._halt()
        logger.info("Focus %s paused remaining=%s", self.phase.value, self.remaining)
        self._events.publish(SessionPaused(self.phase, self.remaining))

    def reset(self) -> None:
        self.pause()
        self.remaining = self.duration
        self._events.publish(SessionReset(self.phase, self.duration))

    def tick(self) -> None:
        if not self.is_active:
            logger.debug("Stale focus tick ignored")
            return
        self.remaining -= 1
        if self.remaining <= 0:
            self._complete()

    # ---- internals ----

    def _cancel_subscription(self) -> None:
        sub, self._subscription = self._subscription, None
        if sub is not None:
            sub.cancel()

    def _halt(self) -> None:
        self._cancel_subscription()
        self.is_active = False

    def _complete(self) -> None:
        self._halt()
        ended = self.phase

        if ended == FocusPhase.WORK:
            self.phase = FocusPhase.BREAK
            self.duration = self.break_seconds
        else:
            self.phase = FocusPhase.WORK
            self.duration = self.work_seconds
        self.remaining = self.duration

        logger.info("Focus %s complete, next %s (%ss)", ended.value, self.phase.value, self.duration)
        self._events.publish(SessionCompleted(ended))

    # ---- display / persistence ----

    def format_remaining(self) -> str:
        minutes, seconds = divmod(max(0, self.remaining), 60)
        return f"{minutes:02d}:{seconds:02d}"

    def progress(self) -> float:
        if self.duration <= 0:
            return 0.0
        done = (self.duration - self.remaining) / self.duration
        return max(0.0, min(1.0, done))

    def snapshot(self) -> FocusSnapshot:
        return FocusSnapshot(duration=self.duration, remaining=self.remaining, phase=self.phase)

    def restore(self, snap: FocusSnapshot) -> None:
        self._halt()
        self.phase = snap.phase
        self.duration = max(1, int(snap.duration))
        self.remaining = max(0, min(int(snap.remaining), self.duration)) or self.duration
