# src/taskflow/focus/focus_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class FocusPhase(StrEnum):
    WORK = "work"
    BREAK = "break"

    @classmethod
    def parse(cls, raw: str | None) -> FocusPhase:
        if not raw:
            return cls.WORK
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return cls.WORK


@dataclass(slots=True, frozen=True)
class FocusSnapshot:
    """Restorable part of the timer; a restored timer always starts paused."""

    duration: int
    remaining: int
    phase: FocusPhase
