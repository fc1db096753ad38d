# src/taskflow/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing is required: every value has a default.
- Malformed numbers fall back to the default instead of failing startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKFLOW"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int, *, minimum: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        val = int(raw)
    except ValueError:
        return default
    if minimum is not None and val < minimum:
        return default
    return val


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    profile_name: str

    # ---- Storage ----
    data_dir: Path
    storage_backend: str
    snapshot_path: Path
    snapshot_db_path: Path
    export_dir: Path
    autosave: bool

    # ---- Focus sessions ----
    work_minutes: int
    break_minutes: int
    focus_bonus_xp: int
    tick_seconds: float

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskflow").strip() or "taskflow"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        profile_name = _env(_k("PROFILE_NAME"), "TaskFlow Master").strip() or "TaskFlow Master"

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskflow"))
        storage_backend = _env(_k("STORAGE_BACKEND"), "json").strip().lower() or "json"
        snapshot_path = _env_path(_k("SNAPSHOT_PATH"), data_dir / "taskflow_data.json")
        snapshot_db_path = _env_path(_k("SNAPSHOT_DB_PATH"), data_dir / "taskflow.sqlite3")
        export_dir = _env_path(_k("EXPORT_DIR"), data_dir / "exports")
        autosave = _env_bool(_k("AUTOSAVE"), True)

        work_minutes = _env_int(_k("WORK_MINUTES"), 25, minimum=1)
        break_minutes = _env_int(_k("BREAK_MINUTES"), 5, minimum=1)
        focus_bonus_xp = _env_int(_k("FOCUS_BONUS_XP"), 25, minimum=0)
        tick_seconds = _env_float(_k("TICK_SECONDS"), 1.0)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            profile_name=profile_name,
            data_dir=data_dir,
            storage_backend=storage_backend,
            snapshot_path=snapshot_path,
            snapshot_db_path=snapshot_db_path,
            export_dir=export_dir,
            autosave=autosave,
            work_minutes=work_minutes,
            break_minutes=break_minutes,
            focus_bonus_xp=focus_bonus_xp,
            tick_seconds=tick_seconds,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
