# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from todolist.logging_setup import _ConsoleNoiseFilter, setup_logging


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


def test_setup_logging_writes_file(tmp_path: Path, restore_root_logging) -> None:
    setup_logging(log_dir=tmp_path, console_level=logging.WARNING)

    logging.getLogger("todolist.tests").debug("engine ready")
    for h in logging.getLogger().handlers:
        h.flush()

    assert "engine ready" in (tmp_path / "todolist.log").read_text("utf-8")


def test_setup_logging_console_only(tmp_path: Path, restore_root_logging) -> None:
    setup_logging(log_dir=tmp_path / "logs", log_to_file=False)

    assert not (tmp_path / "logs").exists()
    assert len(logging.getLogger().handlers) == 1


@pytest.mark.parametrize(
    ("name", "level", "shown"),
    [
        ("todolist.tasks.task_engine", logging.DEBUG, True),
        ("todolist", logging.INFO, True),
        ("py.warnings", logging.WARNING, False),
        ("sqlite_helper", logging.WARNING, False),
        ("sqlite_helper", logging.ERROR, True),
        ("todolistx", logging.INFO, False),
    ],
)
def test_console_filter_passes_own_records_and_only_errors_from_others(
    name: str, level: int, shown: bool
) -> None:
    record = logging.LogRecord(name, level, __file__, 1, "msg", None, None)
    assert _ConsoleNoiseFilter().filter(record) is shown
