# src/taskflow/errors.py

"""
Exception hierarchy.

- ValidationError: bad user input (empty title, unknown mood). The operation had no effect.
- PersistenceError: stored snapshot missing, unreadable or unwritable.

Unknown task ids are not errors: operations on them are silent no-ops.
"""

from __future__ import annotations


class TaskFlowError(Exception):
    """Base class for all errors raised by taskflow."""


class ValidationError(TaskFlowError, ValueError):
    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class PersistenceError(TaskFlowError):
    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source
