# src/todolist/tasks/errors.py

from __future__ import annotations

MISSING_DESCRIPTION = "missing description"
MISSING_DATE = "missing date"
CANCELLED = "cancelled"


class TodoError(Exception):
    """Base class for user-recoverable task list errors."""


class ValidationError(TodoError, ValueError):
    """
    Input rejected before any mutation.

    `reason` is one of MISSING_DESCRIPTION, MISSING_DATE, CANCELLED.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class EmptyCollectionError(TodoError):
    """Delete-all requested while the collection is empty."""

    def __init__(self, message: str = "nothing to delete") -> None:
        super().__init__(message)
