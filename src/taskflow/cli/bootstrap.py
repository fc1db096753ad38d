# src/taskflow/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations (clock, asyncio ticker, storage backend) into AppState,
- loads/saves the snapshot, degrading to an empty state when stored data is broken.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.clock import SystemClock
from ..core.events import PersistenceWarning
from ..core.ports import Clock, PersistenceGateway, Ticker
from ..core.state import AppState, build_app_state
from ..errors import PersistenceError
from ..focus.ticker import AsyncioTicker
from ..storage.gateways import create_gateway
from ..storage.snapshot import decode_snapshot, encode_snapshot

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.snapshot_path.parent.mkdir(parents=True, exist_ok=True)
    settings.snapshot_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(
    *,
    settings=None,
    clock: Clock | None = None,
    ticker: Ticker | None = None,
    gateway: PersistenceGateway | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if gateway is None:
        try:
            gateway = create_gateway(settings)
        except PersistenceError:
            logger.exception("Storage backend unavailable; running without persistence.")
            gateway = None

    return build_app_state(
        settings,
        clock=clock or SystemClock(),
        ticker=ticker or AsyncioTicker(),
        gateway=gateway,
    )


def load_snapshot(state: AppState) -> bool:
    """
    Restore tasks/profile/timer from storage.

    Returns True if a snapshot was restored. Unreadable data never propagates:
    the state stays at its defaults and one PersistenceWarning is published.
    """
    if state.gateway is None:
        state.events.publish(PersistenceWarning("Storage is unavailable; progress will not be saved."))
        return False

    try:
        raw = state.gateway.load()
        if raw is None:
            logger.info("No saved data yet; starting fresh.")
            return False
        snapshot = decode_snapshot(raw)
    except PersistenceError as e:
        logger.warning("Failed to load saved data, starting with an empty board: %s", e)
        state.events.publish(PersistenceWarning(f"Saved data could not be loaded ({e}). Starting fresh."))
        return False

    state.restore(snapshot)
    logger.info("Restored %d tasks (level=%s)", len(snapshot.tasks), snapshot.profile.level)
    return True


def save_snapshot(state: AppState) -> bool:
    if state.gateway is None:
        return False
    try:
        state.gateway.save(encode_snapshot(state.snapshot()))
    except PersistenceError:
        logger.exception("Failed to save data.")
        return False
    return True
