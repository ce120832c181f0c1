# src/todolist/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..storage.kv_store import KeyValueStore
from ..tasks.task_engine import TaskEngine
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules.
    settings: object

    kv_store: KeyValueStore
    task_store: TaskStore
    engine: TaskEngine
