# src/taskflow/focus/ticker.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class AsyncioTickerHandle:
    """
    One repeating subscription on an asyncio loop.

    Each firing schedules the next one before running the callback; cancel()
    drops the pending TimerHandle and marks the subscription dead so nothing
    already in flight reschedules.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop, interval: float, callback: Callable[[], None]) -> None:
        self._loop = loop
        self._interval = interval
        self._callback = callback
        self._cancelled = False
        self._handle: asyncio.TimerHandle | None = loop.call_later(interval, self._fire)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def _fire(self) -> None:
        if self._cancelled:
            return
        self._handle = self._loop.call_later(self._interval, self._fire)
        try:
            self._callback()
        except Exception:
            logger.exception("Ticker callback failed")

    def cancel(self) -> None:
        self._cancelled = True
        handle, self._handle = self._handle, None
        if handle is not None:
            handle.cancel()


class AsyncioTicker:
    """Ticker port backed by the running asyncio loop (call from inside the loop)."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def schedule_repeating(self, interval: float, callback: Callable[[], None]) -> AsyncioTickerHandle:
        loop = self._loop or asyncio.get_running_loop()
        logger.debug("Scheduling repeating tick every %ss", interval)
        return AsyncioTickerHandle(loop, float(interval), callback)
