# tests/conftest.py

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from types import SimpleNamespace

import pytest

from todolist.cli.bootstrap import create_initial_state
from todolist.core.state import AppState
from todolist.tasks.task_engine import TaskEngine

from .fakes import FakeTaskRepo

# Fixed "now" for deterministic dates: 2024-01-02 10:00 UTC.
NOW = datetime(2024, 1, 2, 10, 0, 0, tzinfo=timezone.utc)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="todolist-test",
        log_level="DEBUG",
        log_to_file=False,
        console_enabled=True,
        data_dir=tmp_path / "data",
        store_path=tmp_path / "data" / "storage.sqlite3",
        storage_key="todos",
    )


@pytest.fixture()
def repo() -> FakeTaskRepo:
    return FakeTaskRepo()


@pytest.fixture()
def engine(repo: FakeTaskRepo) -> TaskEngine:
    eng = TaskEngine(repo, clock=lambda: NOW)
    eng.initialize()
    return eng


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """
    AppState wired through the real composition root.

    NOTE: the SQLite store is real; its round-trip is part of what we test.
    """
    return create_initial_state(settings=settings, clock=lambda: NOW)
