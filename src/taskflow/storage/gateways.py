# src/taskflow/storage/gateways.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import sqlite3
from pathlib import Path
from typing import Any

from ..errors import PersistenceError

logger = logging.getLogger(__name__)

DEFAULT_SNAPSHOT_KEY = "taskflow_data"


class JsonFileGateway:
    """
    Snapshot stored as one pretty-printed JSON file.

    Writes go to a temp file first and are moved into place with os.replace,
    so a crash mid-write never leaves a half-written snapshot behind.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def save(self, snapshot: dict[str, Any]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self._path.with_suffix(".tmp")
            tmp.write_text(json.dumps(snapshot, ensure_ascii=False, indent=2), "utf-8")
            os.replace(tmp, self._path)
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(f"Failed to save snapshot to {self._path}: {e}", source=str(self._path)) from e

        with contextlib.suppress(OSError):
            # Best-effort: keep personal data private on disk.
            os.chmod(self._path, 0o600)
        logger.debug("Snapshot saved to %s", self._path)

    def load(self) -> dict[str, Any] | None:
        if not self._path.exists():
            return None
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Failed to read snapshot {self._path}: {e}", source=str(self._path)) from e
        if not isinstance(data, dict):
            raise PersistenceError(f"Snapshot {self._path} is not a JSON object", source=str(self._path))
        logger.info("Snapshot loaded from %s", self._path)
        return data


class SqliteGateway:
    """
    Snapshot stored under one key of a SQLite key-value table.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "taskflow.sqlite3", *, key: str = DEFAULT_SNAPSHOT_KEY) -> None:
        self._db_path = Path(db_path)
        self._key = key
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._ensure_schema()
        except (OSError, sqlite3.Error) as e:
            raise PersistenceError(f"Cannot open snapshot db {self._db_path}: {e}", source=str(self._db_path)) from e
        logger.info("SqliteGateway ready db=%s key=%s", self._db_path, self._key)

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    # ---- public API ----

    def save(self, snapshot: dict[str, Any]) -> None:
        try:
            payload = json.dumps(snapshot, ensure_ascii=False)
            conn = self._get_conn()
            try:
                conn.execute(
                    "INSERT INTO kv(key, value) VALUES (?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                    (self._key, payload),
                )
                conn.commit()
            finally:
                conn.close()
        except (sqlite3.Error, TypeError, ValueError) as e:
            raise PersistenceError(f"Failed to save snapshot to {self._db_path}: {e}", source=str(self._db_path)) from e
        logger.debug("Snapshot saved db=%s key=%s", self._db_path, self._key)

    def load(self) -> dict[str, Any] | None:
        try:
            conn = self._get_conn()
            try:
                row = conn.execute("SELECT value FROM kv WHERE key = ?", (self._key,)).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to read snapshot db {self._db_path}: {e}", source=str(self._db_path)) from e

        if row is None:
            return None
        try:
            data = json.loads(row[0])
        except (TypeError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Stored snapshot under {self._key!r} is not valid JSON", source=self._key) from e
        if not isinstance(data, dict):
            raise PersistenceError(f"Stored snapshot under {self._key!r} is not an object", source=self._key)
        return data


def create_gateway(settings: Any) -> JsonFileGateway | SqliteGateway:
    backend = str(getattr(settings, "storage_backend", "json") or "json").lower()
    if backend == "sqlite":
        return SqliteGateway(settings.snapshot_db_path)
    if backend != "json":
        logger.warning("Unknown storage backend %r, using json", backend)
    return JsonFileGateway(settings.snapshot_path)
