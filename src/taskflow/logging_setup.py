# src/taskflow/logging_setup.py

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FILE_NAME = "taskflow.log"
LOG_MAX_BYTES = 2 * 1024 * 1024
LOG_BACKUP_COUNT = 3

# Loggers that fire once per timer tick; console shows them only on trouble.
_TICK_LOGGERS = ("taskflow.focus.ticker", "taskflow.focus.timer")


class _ConsoleNoiseFilter(logging.Filter):
    """
    The console is shared with the interactive prompt, so it only shows:
    - taskflow records (tick-level loggers only WARNING+)
    - anything else at ERROR+ (python warnings and third-party libraries)
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if not name.startswith("taskflow."):
            return record.levelno >= logging.ERROR
        if name.startswith(_TICK_LOGGERS) and record.levelno < logging.WARNING:
            return False
        return True


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskflow",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Configure the root logger once, before anything logs.

    Console: short format on stderr, filtered by _ConsoleNoiseFilter.
    File: full format, rotated at LOG_MAX_BYTES.

    Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)-7s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    return log_file
