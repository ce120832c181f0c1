# src/todolist/tasks/task_store.py

from __future__ import annotations

import json
import logging
from collections.abc import Sequence

from ..core.ports import KeyValueRepo
from .task_models import Task

logger = logging.getLogger(__name__)

DEFAULT_KEY = "todos"


def _rekey_duplicates(tasks: list[Task]) -> list[Task]:
    """
    Millisecond ids written by older versions can collide. The first task
    (newest, head of the list) keeps its id; later ones are renumbered from max(id) + 1 upward.
    """
    if not tasks:
        return tasks
    seen: set[int] = set()
    next_id = max(t.id for t in tasks) + 1
    for task in tasks:
        if task.id in seen:
            logger.warning("Duplicate task id=%s in stored record; re-keyed to %s", task.id, next_id)
            task.id = next_id
            next_id += 1
        seen.add(task.id)
    return tasks


class TaskStore:
    """
    Persistence adapter: the full task collection as one JSON record.

    The record is a JSON array of {id, task, dueDate, completed, createdAt}
    objects written compactly, i.e. the same bytes JSON.stringify produces,
    so data written by earlier versions stays readable in both directions.

    - load(): absent / corrupt record -> [] (logged, never raised)
    - save(): overwrites the record wholesale; failures are logged and
      reported via the return value, never raised
    """

    def __init__(self, kv: KeyValueRepo, key: str = DEFAULT_KEY) -> None:
        self._kv = kv
        self._key = key

    @staticmethod
    def encode(tasks: Sequence[Task]) -> str:
        return json.dumps(
            [t.to_record() for t in tasks],
            ensure_ascii=False,
            separators=(",", ":"),
        )

    @staticmethod
    def decode(raw: str) -> list[Task]:
        data = json.loads(raw)
        if not isinstance(data, list):
            raise ValueError("task record is not a list")
        tasks = [Task.from_record(item) for item in data]
        return _rekey_duplicates(tasks)

    def load(self) -> list[Task]:
        try:
            raw = self._kv.get_item(self._key)
        except Exception:
            logger.exception("Failed to read task record key=%s", self._key)
            return []

        if raw is None:
            logger.debug("No task record under key=%s", self._key)
            return []

        try:
            tasks = self.decode(raw)
        except (ValueError, KeyError, TypeError, OverflowError, RecursionError) as e:
            logger.warning("Discarding unreadable task record key=%s: %s", self._key, e)
            return []

        logger.info("Loaded %d tasks from key=%s", len(tasks), self._key)
        return tasks

    def save(self, tasks: Sequence[Task]) -> bool:
        try:
            self._kv.set_item(self._key, self.encode(tasks))
        except Exception:
            logger.exception("Failed to save %d tasks under key=%s", len(tasks), self._key)
            return False
        logger.debug("Saved %d tasks under key=%s", len(tasks), self._key)
        return True
