# src/todo_companion/todos/models.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class TodoNotFoundError(KeyError):
    """Raised when an operation targets an id that is not in the list."""

    def __init__(self, todo_id: int) -> None:
        super().__init__(todo_id)
        self.todo_id = todo_id

    def __str__(self) -> str:
        return f"No todo with id={self.todo_id}"


@dataclass(slots=True)
class Todo:
    id: int
    todo: str
    completed: bool = False
    user_id: int | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Todo:
        """
        Build a Todo from the remote/cached JSON shape:
          {"id": 1, "todo": "...", "completed": false, "userId": 26}
        """
        if not isinstance(raw, dict):
            raise ValueError(f"todo record must be an object, got {type(raw).__name__}")

        raw_id = raw.get("id")
        if isinstance(raw_id, bool) or not isinstance(raw_id, int):
            raise ValueError(f"todo record has no integer id: {raw!r}")

        user_id = raw.get("userId")
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            user_id = None

        return cls(
            id=raw_id,
            todo=str(raw.get("todo") or ""),
            completed=bool(raw.get("completed", False)),
            user_id=user_id,
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id, "todo": self.todo, "completed": self.completed}
        if self.user_id is not None:
            out["userId"] = self.user_id
        return out
