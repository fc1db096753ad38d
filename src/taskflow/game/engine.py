# src/taskflow/game/engine.py

"""
Gamification rules.

The engine owns the Profile and reacts to domain events:
- TaskCompleted       -> XP for the task's points, then the daily streak
- task-affecting ones -> recompute total points, evaluate badges
- SessionCompleted    -> focus bonus XP when a work phase ended

It only reads tasks (through TaskReader); it never mutates them.
"""

from __future__ import annotations

import logging
from datetime import date

from ..core.events import (
    AchievementUnlocked,
    EventBus,
    LevelUp,
    MoodChanged,
    ProfileReset,
    SessionCompleted,
    StreakUpdated,
    TaskAdded,
    TaskCompleted,
    TaskDeleted,
    TaskStatusChanged,
)
from ..core.ports import Clock, EventPublisher, TaskReader
from ..errors import ValidationError
from ..focus.focus_models import FocusPhase
from ..tasks.task_models import Task
from .achievements import BADGE_RULES, BadgeRule
from .profile import BadgeSet, Mood, Profile

logger = logging.getLogger(__name__)

DEFAULT_FOCUS_BONUS_XP = 25
XP_PER_LEVEL = 100

_MOOD_CYCLE: tuple[Mood, ...] = (Mood.FOCUSED, Mood.CREATIVE, Mood.ENERGETIC, Mood.CALM)


class GamificationEngine:
    def __init__(
        self,
        *,
        tasks: TaskReader,
        clock: Clock,
        events: EventPublisher,
        profile: Profile | None = None,
        focus_bonus_xp: int = DEFAULT_FOCUS_BONUS_XP,
        rules: tuple[BadgeRule, ...] = BADGE_RULES,
    ) -> None:
        self._tasks = tasks
        self._clock = clock
        self._events = events
        self._rules = rules
        self.focus_bonus_xp = int(focus_bonus_xp)
        self.profile = profile if profile is not None else Profile()

    def subscribe_to(self, bus: EventBus) -> None:
        bus.subscribe(self._handle_task_completed, TaskCompleted)
        bus.subscribe(self._handle_tasks_changed, TaskAdded, TaskStatusChanged, TaskDeleted)
        bus.subscribe(self.on_session_completed, SessionCompleted)

    def _today(self) -> date:
        return self._clock.now().date()

    # ---- event handlers ----

    def _handle_task_completed(self, event: TaskCompleted) -> None:
        self.on_task_completed(event.task)

    def _handle_tasks_changed(self, event: object) -> None:
        self.refresh()

    def on_task_completed(self, task: Task) -> None:
        self.award_xp(task.points)
        self.update_streak(task)

    def on_session_completed(self, event: SessionCompleted) -> None:
        if event.phase == FocusPhase.WORK:
            logger.info("Focus session finished, bonus xp=%s", self.focus_bonus_xp)
            self.award_xp(self.focus_bonus_xp)

    # ---- rules ----

    def award_xp(self, amount: int) -> bool:
        """
        Add XP and level up at most once.

        Reaching level*100 moves to the next level with xp=0; whatever exceeded
        the threshold is dropped, not carried over. Returns True on level-up.
        """
        amount = int(amount)
        if amount < 0:
            logger.warning("award_xp: negative amount %s ignored", amount)
            return False

        p = self.profile
        p.xp += amount

        if p.xp < p.xp_threshold:
            return False

        p.level += 1
        p.xp = 0
        logger.info("Level up -> %s", p.level)
        self._events.publish(LevelUp(p.level))
        return True

    def update_streak(self, task: Task | None = None) -> bool:
        """
        Advance the streak on the first completion of the calendar day.

        Other tasks already completed today, or a streak already advanced today
        (redo of the same task), leave it unchanged.
        """
        today = self._today()
        p = self.profile

        others = [t for t in self._tasks.completed_on(today) if task is None or t.id != task.id]
        if others or p.last_activity == today:
            return False

        p.streak += 1
        p.last_activity = today
        logger.info("Streak -> %s", p.streak)
        self._events.publish(StreakUpdated(p.streak))
        return True

    def check_daily_streak(self) -> None:
        """Startup check: continue, keep or break the streak depending on the last active day."""
        p = self.profile
        if p.last_activity is None:
            return

        today = self._today()
        days = (today - p.last_activity).days
        before = p.streak

        if days == 1:
            if self._tasks.completed_on(today):
                p.streak += 1
                p.last_activity = today
        elif days > 1:
            p.streak = 0

        if p.streak != before:
            logger.info("Daily streak check: %s -> %s (%s days since last activity)", before, p.streak, days)
            self._events.publish(StreakUpdated(p.streak))
            self.check_achievements()

    def refresh(self) -> None:
        self.profile.total_points = sum(t.points for t in self._tasks.completed_tasks())
        self.check_achievements()

    def check_achievements(self) -> list[str]:
        completed = self._tasks.completed_tasks()
        today = self._today()
        unlocked: list[str] = []

        for rule in self._rules:
            if rule.id in self.profile.badges:
                continue
            if not rule.predicate(self.profile, completed, today):
                continue
            if self.profile.badges.add(rule.id):
                unlocked.append(rule.id)
                logger.info("Achievement unlocked: %s", rule.id)
                self._events.publish(AchievementUnlocked(rule.id, rule.title))

        return unlocked

    # ---- profile management ----

    def reset_profile(self) -> None:
        name = self.profile.name
        self.profile = Profile(name=name)
        logger.info("Profile reset (name=%s)", name)
        self._events.publish(ProfileReset(name))

    def restore_profile(self, profile: Profile) -> None:
        self.profile = profile

    def set_mood(self, mood: Mood | str) -> Mood:
        parsed = mood if isinstance(mood, Mood) else Mood.parse(mood)
        if parsed is None:
            choices = ", ".join(m.value for m in Mood)
            raise ValidationError("mood", f"Unknown mood {mood!r}. Choose one of: {choices}.")
        self.profile.mood = parsed
        self._events.publish(MoodChanged(parsed.value))
        return parsed

    def cycle_mood(self) -> Mood:
        try:
            idx = _MOOD_CYCLE.index(self.profile.mood)
        except ValueError:
            idx = -1
        return self.set_mood(_MOOD_CYCLE[(idx + 1) % len(_MOOD_CYCLE)])

    def level_progress(self) -> tuple[int, int]:
        return self.profile.xp, self.profile.xp_threshold

    def badges(self) -> BadgeSet:
        return self.profile.badges
