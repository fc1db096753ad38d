# src/taskflow/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, restores saved data, runs the daily
streak check and then the console connector on one asyncio loop (the focus
timer ticks on the same loop).
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state, load_snapshot, save_snapshot
from ..config import get_settings
from ..connectors.console_connector import attach_event_printer, run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state) -> None:
    """Best-effort shutdown: stop the timer, then persist."""
    state.timer.pause()
    if not save_snapshot(state):
        logger.warning("Progress was not saved on exit.")


async def _run(state) -> None:
    try:
        await run_console_loop(state)
    finally:
        _shutdown(state)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)
    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)
    attach_event_printer(state)

    load_snapshot(state)
    state.engine.check_daily_streak()

    try:
        asyncio.run(_run(state))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    logger.info("Bye.")


if __name__ == "__main__":
    main()
