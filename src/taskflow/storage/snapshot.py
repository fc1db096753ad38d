# src/taskflow/storage/snapshot.py

"""
Snapshot <-> domain objects.

Wire format (JSON-compatible dict):

    {
      "tasks":   [{"id", "title", "priority", "category", "status",
                   "createdAt", "completedAt", "points", "timeSpent"}, ...],
      "profile": {"name", "level", "xp", "streak", "totalPoints",
                  "badges": [...], "mood", "lastActivity"},
      "focus":   {"duration", "remaining", "phase"}
    }

Older data stored the profile under "user"; it is still accepted.
Single broken task records are dropped with a warning; a document that is not
shaped like a snapshot at all raises PersistenceError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from ..errors import PersistenceError
from ..focus.focus_models import FocusPhase, FocusSnapshot
from ..game.profile import DEFAULT_PROFILE_NAME, BadgeSet, Mood, Profile
from ..tasks.task_models import Category, Priority, Task, TaskStatus, points_for

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AppSnapshot:
    tasks: list[Task] = field(default_factory=list)
    profile: Profile = field(default_factory=Profile)
    focus: FocusSnapshot | None = None


# ---- encode ----


def _iso(dt: datetime | None) -> str | None:
    return dt.isoformat() if dt is not None else None


def task_to_dict(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "title": task.title,
        "priority": task.priority.value,
        "category": task.category.value,
        "status": task.status.value,
        "createdAt": _iso(task.created_at),
        "completedAt": _iso(task.completed_at),
        "points": task.points,
        "timeSpent": task.time_spent,
    }


def profile_to_dict(profile: Profile) -> dict[str, Any]:
    return {
        "name": profile.name,
        "level": profile.level,
        "xp": profile.xp,
        "streak": profile.streak,
        "totalPoints": profile.total_points,
        "badges": profile.badges.to_list(),
        "mood": profile.mood.value,
        "lastActivity": profile.last_activity.isoformat() if profile.last_activity else None,
    }


def focus_to_dict(snap: FocusSnapshot) -> dict[str, Any]:
    return {"duration": snap.duration, "remaining": snap.remaining, "phase": snap.phase.value}


def encode_snapshot(snapshot: AppSnapshot) -> dict[str, Any]:
    out: dict[str, Any] = {
        "tasks": [task_to_dict(t) for t in snapshot.tasks],
        "profile": profile_to_dict(snapshot.profile),
    }
    if snapshot.focus is not None:
        out["focus"] = focus_to_dict(snapshot.focus)
    return out


# ---- decode ----


def _parse_dt(raw: Any) -> datetime | None:
    if not raw or not isinstance(raw, str):
        return None
    # JS toISOString() ends with "Z"
    text = raw.strip().replace("Z", "+00:00")
    try:
        dt = datetime.fromisoformat(text)
        if dt.tzinfo is None:
            dt = dt.astimezone()
    except (ValueError, OverflowError):
        return None
    return dt


def _parse_date(raw: Any) -> date | None:
    if not raw or not isinstance(raw, str):
        return None
    try:
        return date.fromisoformat(raw.strip()[:10])
    except ValueError:
        return None


def _int(raw: Any, default: int, *, minimum: int = 0) -> int:
    try:
        val = int(raw)
    except (TypeError, ValueError, OverflowError):
        # json.loads accepts Infinity/NaN; int() rejects them
        return default
    return max(minimum, val)


def task_from_dict(raw: Any) -> Task | None:
    if not isinstance(raw, dict):
        return None

    task_id = raw.get("id")
    title = str(raw.get("title") or "").strip()
    if not task_id or not title:
        return None

    status = TaskStatus.parse(raw.get("status")) or TaskStatus.TODO
    priority = Priority.parse(raw.get("priority")) or Priority.MEDIUM
    category = Category.parse(raw.get("category")) or Category.WORK

    created_at = _parse_dt(raw.get("createdAt"))
    if created_at is None:
        return None

    return Task(
        id=str(task_id),
        title=title,
        priority=priority,
        category=category,
        status=status,
        created_at=created_at,
        points=_int(raw.get("points"), points_for(priority)),
        completed_at=_parse_dt(raw.get("completedAt")),
        time_spent=_int(raw.get("timeSpent"), 0),
    )


def profile_from_dict(raw: Any) -> Profile:
    if not isinstance(raw, dict):
        return Profile()
    return Profile(
        name=str(raw.get("name") or DEFAULT_PROFILE_NAME),
        level=_int(raw.get("level"), 1, minimum=1),
        xp=_int(raw.get("xp"), 0),
        streak=_int(raw.get("streak"), 0),
        total_points=_int(raw.get("totalPoints"), 0),
        badges=BadgeSet.from_list(raw.get("badges")),
        mood=Mood.parse(raw.get("mood")) or Mood.FOCUSED,
        last_activity=_parse_date(raw.get("lastActivity")),
    )


def focus_from_dict(raw: Any) -> FocusSnapshot | None:
    if not isinstance(raw, dict):
        return None
    duration = _int(raw.get("duration"), 0)
    if duration <= 0:
        return None
    return FocusSnapshot(
        duration=duration,
        remaining=_int(raw.get("remaining"), duration),
        phase=FocusPhase.parse(raw.get("phase")),
    )


def decode_snapshot(data: Any) -> AppSnapshot:
    """Raises PersistenceError for anything that cannot be turned into a snapshot."""
    try:
        return _decode(data)
    except PersistenceError:
        raise
    except (TypeError, ValueError, OverflowError, AttributeError, KeyError) as e:
        raise PersistenceError(f"Snapshot could not be decoded: {e}") from e


def _decode(data: Any) -> AppSnapshot:
    if not isinstance(data, dict):
        raise PersistenceError(f"Snapshot must be an object, got {type(data).__name__}")

    raw_tasks = data.get("tasks", [])
    if not isinstance(raw_tasks, list):
        raise PersistenceError("Snapshot 'tasks' must be a list")

    tasks: list[Task] = []
    seen: set[str] = set()
    for raw in raw_tasks:
        task = task_from_dict(raw)
        if task is None or task.id in seen:
            logger.warning("Skipping malformed task record: %r", raw)
            continue
        seen.add(task.id)
        tasks.append(task)

    raw_profile = data.get("profile", data.get("user"))
    if raw_profile is not None and not isinstance(raw_profile, dict):
        raise PersistenceError("Snapshot 'profile' must be an object")

    return AppSnapshot(
        tasks=tasks,
        profile=profile_from_dict(raw_profile),
        focus=focus_from_dict(data.get("focus")),
    )
