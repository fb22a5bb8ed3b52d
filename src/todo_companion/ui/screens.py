# src/todo_companion/ui/screens.py

"""
Text renderers for the two console screens.

Each function returns a ready-to-print string; styling is plain ANSI and is
skipped entirely when `view.color` is False (tests, non-TTY output).
"""

from __future__ import annotations

from collections.abc import Sequence

from ..core.state import ViewState
from ..todos.models import Todo

RESET = "\033[0m"
BOLD = "\033[1m"
STRIKE = "\033[9m"
NIGHT = "\033[48;5;236m\033[97m"  # dark grey background, bright text
ACTION = "\033[34m"
DANGER = "\033[31m"

HEADER = "Todo List"
DETAILS_TEXT = "This is the Details screen"


def _style(text: str, code: str, view: ViewState) -> str:
    if not view.color or not code:
        return text
    # Re-apply night palette after a reset so the whole line keeps its background.
    tail = RESET + (NIGHT if view.night_mode else "")
    return f"{code}{text}{tail}"


def _wrap_night(lines: list[str], view: ViewState) -> str:
    body = "\n".join(lines)
    if view.color and view.night_mode:
        return f"{NIGHT}{body}{RESET}"
    return body


def render_loading() -> str:
    return "Loading..."


def render_todo_line(todo: Todo, view: ViewState) -> str:
    mark = "[x]" if todo.completed else "[ ]"
    text = _style(todo.todo, STRIKE, view) if todo.completed else todo.todo
    action = "Undo" if todo.completed else "Complete"
    actions = f"{_style(action, ACTION, view)} | {_style('Delete', DANGER, view)}"
    return f"  {mark} {todo.id:>3}. {text}  ({actions})"


def render_home(todos: Sequence[Todo], view: ViewState) -> str:
    lines = [
        _style(HEADER, BOLD, view),
        f"Night Mode: {'ON' if view.night_mode else 'OFF'}",
        "",
    ]

    if todos:
        lines.extend(render_todo_line(t, view) for t in todos)
    else:
        lines.append("  (no todos)")

    lines.append("")
    lines.append(f"Add new todo: {view.draft}" if view.draft else "Add new todo: (type text and press Enter)")
    lines.append("Actions: /toggle <id>  /del <id>  /add <text>  /details  /night  /help")
    return _wrap_night(lines, view)


def render_details(view: ViewState) -> str:
    return _wrap_night([DETAILS_TEXT, "", "Use /back to return to the list."], view)
