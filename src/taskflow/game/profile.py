# src/taskflow/game/profile.py

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum

DEFAULT_PROFILE_NAME = "TaskFlow Master"


class Mood(StrEnum):
    """Cosmetic tag; no rule looks at it."""

    FOCUSED = "focused"
    CREATIVE = "creative"
    ENERGETIC = "energetic"
    CALM = "calm"

    @classmethod
    def parse(cls, raw: str | None) -> Mood | None:
        if not raw:
            return None
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return None


class BadgeSet:
    """
    Set of unlocked badge ids.

    Remembers unlock order so the persisted list is stable.
    """

    __slots__ = ("_ids",)

    def __init__(self, ids: Iterable[str] = ()) -> None:
        self._ids: dict[str, None] = {}
        for badge_id in ids:
            self.add(badge_id)

    def add(self, badge_id: str) -> bool:
        """Add badge_id; True only when it was not there yet."""
        if badge_id in self._ids:
            return False
        self._ids[badge_id] = None
        return True

    def __contains__(self, badge_id: object) -> bool:
        return badge_id in self._ids

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BadgeSet):
            return set(self._ids) == set(other._ids)
        if isinstance(other, (set, frozenset)):
            return set(self._ids) == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"BadgeSet({list(self._ids)!r})"

    def to_list(self) -> list[str]:
        return list(self._ids)

    @classmethod
    def from_list(cls, raw: object) -> BadgeSet:
        if not isinstance(raw, (list, tuple)):
            return cls()
        return cls(str(x) for x in raw if isinstance(x, str) and x)


@dataclass(slots=True)
class Profile:
    name: str = DEFAULT_PROFILE_NAME
    level: int = 1
    xp: int = 0
    streak: int = 0
    total_points: int = 0
    badges: BadgeSet = field(default_factory=BadgeSet)
    mood: Mood = Mood.FOCUSED

    # Last calendar day the daily streak was advanced.
    last_activity: date | None = None

    @property
    def xp_threshold(self) -> int:
        return self.level * 100
