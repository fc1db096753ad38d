# src/taskflow/game/achievements.py

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Final

from ..tasks.task_models import Priority, Task
from .profile import Profile

RULESET_VERSION: Final[int] = 1

BadgePredicate = Callable[[Profile, Sequence[Task], date], bool]


@dataclass(slots=True, frozen=True)
class BadgeRule:
    id: str
    title: str
    description: str
    predicate: BadgePredicate


def _completed_on(tasks: Sequence[Task], day: date) -> int:
    return sum(1 for t in tasks if t.completed_at is not None and t.completed_at.date() == day)


BADGE_RULES: Final[tuple[BadgeRule, ...]] = (
    BadgeRule(
        id="first-task",
        title="First Steps",
        description="Complete your first task!",
        predicate=lambda profile, completed, today: len(completed) >= 1,
    ),
    BadgeRule(
        id="streak-3",
        title="On Fire",
        description="3 day streak!",
        predicate=lambda profile, completed, today: profile.streak >= 3,
    ),
    BadgeRule(
        id="power-user",
        title="Power User",
        description="10 tasks in one day!",
        predicate=lambda profile, completed, today: _completed_on(completed, today) >= 10,
    ),
    BadgeRule(
        id="legendary",
        title="Legend",
        description="Complete a legendary task!",
        predicate=lambda profile, completed, today: any(t.priority == Priority.LEGENDARY for t in completed),
    ),
)

BADGES_BY_ID: Final[dict[str, BadgeRule]] = {rule.id: rule for rule in BADGE_RULES}
