# src/taskflow/storage/export.py

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Final

from ..core.state import AppState
from ..errors import PersistenceError
from .snapshot import profile_to_dict, task_to_dict

logger = logging.getLogger(__name__)

EXPORT_FORMAT_VERSION: Final[str] = "1.0.0"


def build_export(state: AppState) -> dict[str, Any]:
    """Read-only export document; nothing in the state is touched."""
    return {
        "tasks": [task_to_dict(t) for t in state.task_store.list_tasks()],
        "profile": profile_to_dict(state.engine.profile),
        "exportTimestamp": state.clock.now().isoformat(),
        "formatVersion": EXPORT_FORMAT_VERSION,
    }


def export_filename(state: AppState) -> str:
    return f"taskflow-export-{state.clock.now().date().isoformat()}.json"


def write_export(state: AppState, directory: str | Path) -> Path:
    doc = build_export(state)
    out_dir = Path(directory)
    path = out_dir / export_filename(state)
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(doc, ensure_ascii=False, indent=2), "utf-8")
    except OSError as e:
        raise PersistenceError(f"Failed to write export {path}: {e}", source=str(path)) from e
    logger.info("Exported %d tasks to %s", len(doc["tasks"]), path)
    return path
