# src/taskflow/game/motivation.py

from __future__ import annotations

import random
from typing import Final

MOTIVATIONAL_QUOTES: Final[tuple[str, ...]] = (
    "Every completed task is a step towards mastery!",
    "You're building momentum - keep conquering those quests!",
    "Legendary productivity requires legendary dedication!",
    "Your future self will thank you for every task completed today!",
    "Progress over perfection - you're doing amazing!",
    "Each quest completed unlocks new possibilities!",
    "Your productivity streak is on fire!",
    "Master your tasks, master your destiny!",
)


def random_quote(rng: random.Random | None = None) -> str:
    return (rng or random).choice(MOTIVATIONAL_QUOTES)
