# src/todolist/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks.task_view import build_rows, render_rows

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def make_confirm(read: InputFn, write: OutputFn) -> Callable[[str], bool]:
    """y/N prompt; EOF or anything but yes counts as no."""

    def confirm(question: str) -> bool:
        try:
            answer = read(f"{question} [y/N] ")
        except (EOFError, KeyboardInterrupt):
            write("")
            return False
        return answer.strip().lower() in ("y", "yes")

    return confirm


def run_console_loop(
    state: AppState,
    *,
    read: InputFn = input,
    write: OutputFn = print,
) -> None:
    logger.info("Console connector started (tasks=%d).", state.engine.count())
    write(f"[{_ts_local()}] Use /help for commands. Use /exit to quit.\n")
    write(render_rows(build_rows(state.engine)))

    confirm = make_confirm(read, write)

    while True:
        try:
            user_input = read(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write("")
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        if not user_input.startswith("/"):
            # Bare text is shorthand for adding a task due today.
            user_input = f"/add {state.engine.today().isoformat()} {user_input}"

        try:
            response = command_registry.handle(state, user_input, confirm=confirm)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        if response is not None:
            write(response)

    logger.info("Console connector finished.")
