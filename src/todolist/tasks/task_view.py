# src/todolist/tasks/task_view.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from .task_engine import TaskEngine
from .task_models import TaskStatus

EMPTY_STATE_TEXT = "No task found"


def format_due_date(value: date) -> str:
    """DD/MM/YYYY, the day-first order the list has always shown."""
    return value.strftime("%d/%m/%Y")


@dataclass(frozen=True, slots=True)
class TaskRow:
    """One rendered line of the list; everything the view needs, nothing it must compute."""

    id: int
    text: str
    due_label: str
    status: TaskStatus
    completed: bool
    action_hint: str


def build_rows(engine: TaskEngine, today: date | datetime | None = None) -> list[TaskRow]:
    rows: list[TaskRow] = []
    for task in engine.visible_tasks():
        rows.append(
            TaskRow(
                id=task.id,
                text=task.description,
                due_label=format_due_date(task.due_date),
                status=engine.derive_status(task, today),
                completed=task.completed,
                action_hint="Mark as pending" if task.completed else "Mark as completed",
            )
        )
    return rows


def render_rows(rows: list[TaskRow]) -> str:
    if not rows:
        return EMPTY_STATE_TEXT

    id_width = max(len(str(r.id)) for r in rows)
    text_width = max(len(r.text) for r in rows)
    lines = []
    for r in rows:
        mark = "x" if r.completed else " "
        lines.append(
            f"[{mark}] {str(r.id).rjust(id_width)}  {r.text.ljust(text_width)}  "
            f"{r.due_label}  {r.status}"
        )
    return "\n".join(lines)
