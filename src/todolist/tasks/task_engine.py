# src/todolist/tasks/task_engine.py

from __future__ import annotations

"""
Task engine.

Owns the in-memory task collection and the active filter:
- validates and creates tasks (newest first),
- toggles / deletes / clears behind explicit confirmation inputs,
- filters the collection and derives the display status,
- writes the whole collection through the persistence adapter after every mutation.

The engine never prompts; the view layer resolves confirmations and passes the answer in.
"""

import logging
from collections.abc import Callable
from datetime import date, datetime
from typing import Any

from ..core.ports import TaskRepo
from .errors import (
    CANCELLED,
    MISSING_DATE,
    MISSING_DESCRIPTION,
    EmptyCollectionError,
    ValidationError,
)
from .task_models import Task, TaskFilter, TaskStatus, format_timestamp, parse_due_date

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
PastDueConfirm = bool | Callable[[], bool] | None


def _local_now() -> datetime:
    return datetime.now().astimezone()


def _as_day(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


class TaskEngine:
    def __init__(self, repo: TaskRepo, *, clock: Clock | None = None) -> None:
        self._repo = repo
        self._clock: Clock = clock or _local_now
        self.tasks: list[Task] = []
        self.active_filter: TaskFilter = TaskFilter.ALL
        self.last_save_ok: bool = True

    # ---- lifecycle ----

    def initialize(self) -> int:
        """Load the stored collection and reset the filter. Returns the task count."""
        self.tasks = list(self._repo.load())
        self.active_filter = TaskFilter.ALL
        logger.info("TaskEngine initialized tasks=%d", len(self.tasks))
        return len(self.tasks)

    def _persist(self) -> None:
        ok = self._repo.save(self.tasks)
        self.last_save_ok = bool(ok)
        if not ok:
            # In-memory state stays as is; the next successful save catches up.
            logger.warning("Task collection not persisted (tasks=%d).", len(self.tasks))

    # ---- mutations ----

    def _next_id(self, reference_now: datetime) -> int:
        candidate = int(reference_now.timestamp() * 1000)
        if self.tasks:
            highest = max(t.id for t in self.tasks)
            if candidate <= highest:
                logger.debug("Id %s already taken; using %s", candidate, highest + 1)
                candidate = highest + 1
        return candidate

    def add_task(
        self,
        description: str | None,
        due_date: Any,
        reference_now: datetime | None = None,
        confirm: PastDueConfirm = None,
    ) -> Task:
        """
        Validate and prepend a new task.

        Raises ValidationError("missing description" | "missing date" | "cancelled").
        A due date before today's calendar day needs `confirm` to be True
        (or a callable returning True); anything else cancels the add.
        """
        text = (description or "").strip()
        if not text:
            raise ValidationError(MISSING_DESCRIPTION)

        if due_date is None or due_date == "":
            raise ValidationError(MISSING_DATE)
        try:
            due = parse_due_date(due_date)
        except (TypeError, ValueError):
            raise ValidationError(MISSING_DATE) from None

        now = reference_now or self._clock()
        if due < now.date():
            accepted = confirm() if callable(confirm) else confirm is True
            if not accepted:
                logger.info("Past due date %s declined; task not added.", due)
                raise ValidationError(CANCELLED)

        task = Task(
            id=self._next_id(now),
            description=text,
            due_date=due,
            completed=False,
            created_at=format_timestamp(now),
        )
        self.tasks.insert(0, task)
        self._persist()
        logger.info("Task added id=%s due=%s", task.id, task.due_date)
        return task

    def toggle_completed(self, task_id: int) -> Task | None:
        task = self.get_task(task_id)
        if task is None:
            logger.debug("toggle_completed: no task id=%s", task_id)
            return None
        task.completed = not task.completed
        self._persist()
        logger.info("Task toggled id=%s completed=%s", task.id, task.completed)
        return task

    def delete_task(self, task_id: int, confirmed: bool) -> bool:
        if confirmed is not True:
            return False
        before = len(self.tasks)
        self.tasks = [t for t in self.tasks if t.id != task_id]
        removed = len(self.tasks) != before
        self._persist()
        if removed:
            logger.info("Task deleted id=%s", task_id)
        return removed

    def delete_all(self, confirmed: bool) -> int:
        """
        Clear the collection.

        Raises EmptyCollectionError when there is nothing to delete, whatever
        `confirmed` says. Returns how many tasks were removed (0 if not confirmed).
        """
        if not self.tasks:
            raise EmptyCollectionError()
        if confirmed is not True:
            return 0
        removed = len(self.tasks)
        self.tasks = []
        self._persist()
        logger.info("All tasks deleted count=%d", removed)
        return removed

    # ---- filter / queries ----

    def set_filter(self, task_filter: TaskFilter | str) -> TaskFilter:
        self.active_filter = TaskFilter.parse(task_filter)
        return self.active_filter

    def visible_tasks(self) -> list[Task]:
        if self.active_filter is TaskFilter.COMPLETED:
            return [t for t in self.tasks if t.completed]
        if self.active_filter is TaskFilter.PENDING:
            return [t for t in self.tasks if not t.completed]
        return list(self.tasks)

    def derive_status(self, task: Task, today: date | datetime | None = None) -> TaskStatus:
        if task.completed:
            return TaskStatus.COMPLETED
        day = _as_day(today) if today is not None else self.today()
        if task.due_date < day:
            return TaskStatus.OVERDUE
        return TaskStatus.PENDING

    def today(self) -> date:
        """Calendar day of the engine clock."""
        return self._clock().date()

    def get_task(self, task_id: int) -> Task | None:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def count(self) -> int:
        return len(self.tasks)

    def counts(self) -> dict[TaskFilter, int]:
        done = sum(1 for t in self.tasks if t.completed)
        return {
            TaskFilter.ALL: len(self.tasks),
            TaskFilter.COMPLETED: done,
            TaskFilter.PENDING: len(self.tasks) - done,
        }
