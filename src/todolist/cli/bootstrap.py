# src/todolist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the durable store, the persistence adapter and the single TaskEngine into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..storage.kv_store import KeyValueStore
from ..tasks.task_engine import Clock, TaskEngine
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.store_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, clock: Clock | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    kv_store = KeyValueStore(settings.store_path)
    task_store = TaskStore(kv_store, key=getattr(settings, "storage_key", "todos"))
    engine = TaskEngine(task_store, clock=clock)
    engine.initialize()

    return AppState(
        settings=settings,
        kv_store=kv_store,
        task_store=task_store,
        engine=engine,
    )
