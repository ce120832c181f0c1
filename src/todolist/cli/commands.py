# src/todolist/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.ports import ConfirmFn
from ..core.state import AppState
from ..tasks.errors import CANCELLED, MISSING_DATE, MISSING_DESCRIPTION, TodoError, ValidationError
from ..tasks.task_models import TaskFilter
from ..tasks.task_view import build_rows, render_rows

CommandHandler = Callable[[AppState, list[str], ConfirmFn | None], str]

logger = logging.getLogger(__name__)

_VALIDATION_MESSAGES = {
    MISSING_DESCRIPTION: "Please enter a task.",
    MISSING_DATE: "Please pick a due date (YYYY-MM-DD).",
    CANCELLED: "Task not added.",
}


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        confirm: ConfirmFn | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            return handler(state, args, confirm)
        except ValidationError as e:
            logger.debug("Command /%s rejected: %s", name, e.reason)
            return _VALIDATION_MESSAGES.get(e.reason, str(e))
        except TodoError as e:
            logger.debug("Command /%s refused: %s", name, e)
            return f"Nothing done: {e}."

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _ask(confirm: ConfirmFn | None, question: str) -> bool:
    return bool(confirm(question)) if confirm is not None else False


def _parse_id(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        return int(args[0])
    except ValueError:
        return None


def cmd_help(state: AppState, args: list[str], confirm: ConfirmFn | None = None) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str], confirm: ConfirmFn | None = None) -> str:
    return render_rows(build_rows(state.engine))


def cmd_status(state: AppState, args: list[str], confirm: ConfirmFn | None = None) -> str:
    counts = state.engine.counts()
    saved = "OK" if state.engine.last_save_ok else "FAILED (changes kept in memory)"
    return (
        "Status:\n"
        f"  Filter: {state.engine.active_filter}\n"
        f"  Tasks: {counts[TaskFilter.ALL]} total, "
        f"{counts[TaskFilter.PENDING]} pending, {counts[TaskFilter.COMPLETED]} completed\n"
        f"  Last save: {saved}"
    )


def cmd_add(state: AppState, args: list[str], confirm: ConfirmFn | None = None) -> str:
    """
    /add 2024-01-05 Buy milk
    """
    due = args[0] if args else None
    description = " ".join(args[1:])
    task = state.engine.add_task(
        description,
        due,
        confirm=lambda: _ask(confirm, "The selected date has already passed. Continue anyway?"),
    )
    return f"Added task {task.id}: {task.description}"


def cmd_done(state: AppState, args: list[str], confirm: ConfirmFn | None = None) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /done <id>"
    task = state.engine.toggle_completed(task_id)
    if task is None:
        return f"Task id {task_id} not found."
    return f"Task {task_id} marked as {'completed' if task.completed else 'pending'}."


def cmd_delete(state: AppState, args: list[str], confirm: ConfirmFn | None = None) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /del <id>"
    if state.engine.get_task(task_id) is None:
        return f"Task id {task_id} not found."
    confirmed = _ask(confirm, "Delete this task?")
    if not state.engine.delete_task(task_id, confirmed):
        return "Task kept."
    return f"Task {task_id} deleted."


def cmd_clear(state: AppState, args: list[str], confirm: ConfirmFn | None = None) -> str:
    total = state.engine.count()
    confirmed = total > 0 and _ask(confirm, f"Delete all {total} tasks?")
    removed = state.engine.delete_all(confirmed)
    if not removed:
        return "Tasks kept."
    return f"Deleted {removed} tasks."


def cmd_filter(state: AppState, args: list[str], confirm: ConfirmFn | None = None) -> str:
    """
    /filter              -> show current filter
    /filter pending      -> switch filter and show the list
    """
    if not args:
        return f"Current filter: {state.engine.active_filter}. Use /filter all|completed|pending."
    try:
        state.engine.set_filter(args[0])
    except ValueError:
        return "Usage: /filter all|completed|pending."
    return render_rows(build_rows(state.engine))


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show tasks under the current filter.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add YYYY-MM-DD description.")
registry.register("done", cmd_done, help_text="Toggle completion: /done <id>.", aliases=["toggle"])
registry.register("del", cmd_delete, help_text="Delete one task: /del <id>.", aliases=["rm"])
registry.register("clear", cmd_clear, help_text="Delete all tasks.")
registry.register("filter", cmd_filter, help_text="Filter the list: /filter all|completed|pending.")
registry.register("status", cmd_status, help_text="Show counts, filter and last save result.")
