# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKFLOW_APP_NAME": "App display name (default: taskflow).",
    "TASKFLOW_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    "TASKFLOW_PROFILE_NAME": "Display name of a fresh profile (default: TaskFlow Master).",
    # Storage
    "TASKFLOW_DATA_DIR": "Local data dir (default: .local/taskflow).",
    "TASKFLOW_STORAGE_BACKEND": "json | sqlite (default: json).",
    "TASKFLOW_SNAPSHOT_PATH": "JSON snapshot path (default: <data_dir>/taskflow_data.json).",
    "TASKFLOW_SNAPSHOT_DB_PATH": "SQLite snapshot db (default: <data_dir>/taskflow.sqlite3).",
    "TASKFLOW_EXPORT_DIR": "Where /export writes (default: <data_dir>/exports).",
    "TASKFLOW_AUTOSAVE": "Save after every console command (true/false, default: true).",
    # Focus sessions
    "TASKFLOW_WORK_MINUTES": "Work phase length (default: 25).",
    "TASKFLOW_BREAK_MINUTES": "Break phase length (default: 5).",
    "TASKFLOW_FOCUS_BONUS_XP": "XP for a finished work phase (default: 25).",
    "TASKFLOW_TICK_SECONDS": "Seconds between timer ticks (default: 1.0).",
}
