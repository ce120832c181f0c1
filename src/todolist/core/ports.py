# src/todolist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the engine and the view layer.

The engine depends on Protocols instead of concrete implementations.
This keeps storage swappable and makes testing easier.
"""

from collections.abc import Callable, Sequence
from typing import Any, Protocol

ConfirmFn = Callable[[str], bool]
# View-side yes/no gate: receives a question, returns the user's decision.


class KeyValueRepo(Protocol):
    """Durable text store keyed by name (localStorage-like)."""

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...


class TaskRepo(Protocol):
    """
    Persistence adapter for the whole task collection.

    load() never raises; save() overwrites the record and reports success.
    """

    def load(self) -> list[Any]: ...
    def save(self, tasks: Sequence[Any]) -> bool: ...
