# src/todo_companion/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from ..todos.store import TodoStore


class Screen(StrEnum):
    HOME = "home"
    DETAILS = "details"


@dataclass(slots=True)
class ViewState:
    """Ephemeral view state. Never persisted across restarts."""

    screen: Screen = Screen.HOME
    night_mode: bool = False
    draft: str = ""
    color: bool = True


@dataclass
class AppState:
    # Store Settings on the state for easy access in commands/connectors.
    settings: Any

    store: TodoStore
    view: ViewState = field(default_factory=ViewState)

    # Closed on shutdown (TodoApiClient / KeyValueStore); optional in tests.
    remote: Any | None = None
    storage: Any | None = None
