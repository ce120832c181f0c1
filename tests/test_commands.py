# tests/test_commands.py

from __future__ import annotations

from datetime import timedelta

from todolist.cli.bootstrap import create_initial_state
from todolist.cli.commands import CommandRegistry, registry
from todolist.tasks.task_models import TaskFilter

from .conftest import NOW

TOMORROW = (NOW.date() + timedelta(days=1)).isoformat()
YESTERDAY = (NOW.date() - timedelta(days=1)).isoformat()


def _yes(question: str) -> bool:
    return True


def _no(question: str) -> bool:
    return False


def test_command_registry_routes_and_aliases(state) -> None:
    reg = CommandRegistry()
    called = {"a": 0}

    def handler(state, args, confirm):
        called["a"] += 1
        return " ".join(args)

    reg.register("a", handler, "a", aliases=["alpha"])

    assert reg.handle(state, "/a x y") == "x y"
    assert reg.handle(state, "/ALPHA z") == "z"
    assert called["a"] == 2


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_add_and_list(state) -> None:
    reply = registry.handle(state, f"/add {TOMORROW} Buy milk")
    assert reply is not None and reply.startswith("Added task")

    listing = registry.handle(state, "/list") or ""
    assert "Buy milk" in listing
    assert "Pending" in listing


def test_add_validation_messages(state) -> None:
    assert registry.handle(state, f"/add {TOMORROW}") == "Please enter a task."
    assert registry.handle(state, "/add soon Buy milk") == "Please pick a due date (YYYY-MM-DD)."
    assert registry.handle(state, f"/add {YESTERDAY} Late", confirm=_no) == "Task not added."
    assert state.engine.count() == 0

    reply = registry.handle(state, f"/add {YESTERDAY} Late", confirm=_yes) or ""
    assert reply.startswith("Added task")


def test_done_toggles(state) -> None:
    task = state.engine.add_task("Buy milk", TOMORROW)
    assert registry.handle(state, f"/done {task.id}") == f"Task {task.id} marked as completed."
    assert registry.handle(state, f"/done {task.id}") == f"Task {task.id} marked as pending."
    assert registry.handle(state, "/done 42") == "Task id 42 not found."
    assert registry.handle(state, "/done x") == "Usage: /done <id>"


def test_delete_asks_for_confirmation(state) -> None:
    task = state.engine.add_task("Buy milk", TOMORROW)
    assert registry.handle(state, f"/del {task.id}", confirm=_no) == "Task kept."
    assert registry.handle(state, f"/del {task.id}") == "Task kept."
    assert registry.handle(state, f"/del {task.id}", confirm=_yes) == f"Task {task.id} deleted."
    assert state.engine.count() == 0


def test_clear(state) -> None:
    assert registry.handle(state, "/clear", confirm=_yes) == "Nothing done: nothing to delete."

    state.engine.add_task("a", TOMORROW)
    state.engine.add_task("b", TOMORROW)
    questions: list[str] = []

    def confirm(question: str) -> bool:
        questions.append(question)
        return True

    assert registry.handle(state, "/clear", confirm=confirm) == "Deleted 2 tasks."
    assert questions == ["Delete all 2 tasks?"]


def test_filter(state) -> None:
    done = state.engine.add_task("done one", TOMORROW)
    state.engine.add_task("open one", TOMORROW)
    state.engine.toggle_completed(done.id)

    listing = registry.handle(state, "/filter completed") or ""
    assert state.engine.active_filter is TaskFilter.COMPLETED
    assert "done one" in listing and "open one" not in listing

    assert registry.handle(state, "/filter bogus") == "Usage: /filter all|completed|pending."
    assert "completed" in (registry.handle(state, "/filter") or "")


def test_status_and_help(state) -> None:
    state.engine.add_task("a", TOMORROW)
    status = registry.handle(state, "/status") or ""
    assert "1 total, 1 pending, 0 completed" in status
    assert "Last save: OK" in status
    assert "/add" in (registry.handle(state, "/help") or "")


def test_changes_survive_restart(state, settings) -> None:
    task = state.engine.add_task("Buy milk", TOMORROW)
    registry.handle(state, f"/done {task.id}")

    reloaded = create_initial_state(settings=settings, clock=lambda: NOW)
    assert [(t.id, t.completed) for t in reloaded.engine.tasks] == [(task.id, True)]
