# src/todolist/tasks/task_models.py

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import StrEnum
from typing import Any

_DUE_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


class TaskFilter(StrEnum):
    """View predicate over the collection. Transient, never persisted."""

    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"

    @classmethod
    def parse(cls, raw: str | TaskFilter) -> TaskFilter:
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            raise ValueError(f"unknown filter: {raw!r}") from None


class TaskStatus(StrEnum):
    """
    Display status of a task.

    Only `completed` is stored; Overdue vs Pending is recomputed from the due
    date every time it is asked for.
    """

    COMPLETED = "Completed"
    OVERDUE = "Overdue"
    PENDING = "Pending"


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a trailing Z (2024-01-02T03:04:05.678Z)."""
    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def parse_due_date(raw: Any) -> date:
    """Accept a date (not a datetime) or a YYYY-MM-DD string."""
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if isinstance(raw, str):
        text = raw.strip()
        # fromisoformat also takes week dates and basic format; only YYYY-MM-DD is a due date.
        if not _DUE_DATE_RE.fullmatch(text):
            raise ValueError(f"expected YYYY-MM-DD, got {raw!r}")
        return date.fromisoformat(text)
    raise TypeError(f"expected date or YYYY-MM-DD string, got {type(raw).__name__}")


@dataclass(slots=True)
class Task:
    id: int
    description: str
    due_date: date
    completed: bool = False
    created_at: str = ""

    def to_record(self) -> dict[str, Any]:
        # Key names and order are the durable record format; do not rename.
        return {
            "id": self.id,
            "task": self.description,
            "dueDate": self.due_date.isoformat(),
            "completed": self.completed,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> Task:
        if not isinstance(data, dict):
            raise TypeError("task record must be an object")

        raw_id = data["id"]
        if isinstance(raw_id, bool) or not isinstance(raw_id, (int, float)):
            raise TypeError("task id must be a number")
        if isinstance(raw_id, float) and not raw_id.is_integer():
            raise ValueError(f"task id must be a whole number, got {raw_id!r}")

        description = str(data["task"]).strip()
        if not description:
            raise ValueError("task description is empty")

        return cls(
            id=int(raw_id),
            description=description,
            due_date=parse_due_date(data["dueDate"]),
            completed=bool(data.get("completed", False)),
            created_at=str(data.get("createdAt") or ""),
        )
