# src/todo_companion/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the todo store.

The store depends on Protocols instead of concrete implementations.
This keeps storage/remote backends swappable and makes testing easier.
"""

from typing import Any, Protocol


class KeyValueRepo(Protocol):
    """Durable key-value slot storage (survives restarts)."""

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...


class TodoRemote(Protocol):
    """Remote todo collection (best-effort mirror)."""

    async def fetch_todos(self) -> list[dict[str, Any]]: ...
    async def update_completed(self, todo_id: int, completed: bool) -> dict[str, Any]: ...
    async def delete_todo(self, todo_id: int) -> dict[str, Any]: ...
