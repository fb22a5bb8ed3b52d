# src/todo_companion/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from ..core.state import AppState, Screen
from ..todos.models import TodoNotFoundError

CommandHandler = Callable[[AppState, list[str]], Awaitable[str]]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

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

    async def handle(self, state: AppState, line: str) -> str | None:
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

        return await handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_id(args: list[str]) -> int | None:
    if len(args) != 1:
        return None
    try:
        return int(args[0])
    except ValueError:
        return None


async def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


async def cmd_list(state: AppState, args: list[str]) -> str:
    state.view.screen = Screen.HOME
    return ""


async def cmd_add(state: AppState, args: list[str]) -> str:
    text = " ".join(args).strip() or state.view.draft.strip()
    if not text:
        return "Usage: /add <text>"
    state.view.draft = text
    todo = await state.store.add(text)
    state.view.draft = ""
    state.view.screen = Screen.HOME
    return f"Added #{todo.id}: {todo.todo}"


async def cmd_toggle(state: AppState, args: list[str]) -> str:
    todo_id = _parse_id(args)
    if todo_id is None:
        return "Usage: /toggle <id>"
    try:
        await state.store.toggle(todo_id)
    except TodoNotFoundError as e:
        return str(e)
    todo = state.store.get(todo_id)
    done = bool(todo and todo.completed)
    return f"#{todo_id} marked {'complete' if done else 'not complete'}."


async def cmd_delete(state: AppState, args: list[str]) -> str:
    todo_id = _parse_id(args)
    if todo_id is None:
        return "Usage: /del <id>"
    if await state.store.delete(todo_id):
        return f"Deleted #{todo_id}."
    return f"Could not delete #{todo_id} (remote error, see log)."


async def cmd_night(state: AppState, args: list[str]) -> str:
    """
    /night      -> flip night mode
    /night on   -> enable
    /night off  -> disable
    """
    if not args:
        state.view.night_mode = not state.view.night_mode
    else:
        arg = args[0].lower()
        if arg in ("on", "1", "true", "yes"):
            state.view.night_mode = True
        elif arg in ("off", "0", "false", "no"):
            state.view.night_mode = False
        else:
            return "Usage: /night on or /night off."
    return f"Night mode {'ON' if state.view.night_mode else 'OFF'}."


async def cmd_details(state: AppState, args: list[str]) -> str:
    state.view.screen = Screen.DETAILS
    return ""


async def cmd_back(state: AppState, args: list[str]) -> str:
    state.view.screen = Screen.HOME
    return ""


async def cmd_status(state: AppState, args: list[str]) -> str:
    settings = state.settings
    timeout = getattr(settings, "http_timeout_seconds", None)
    todos = state.store.todos()
    done = sum(1 for t in todos if t.completed)
    return (
        "Status:\n"
        f"  API: {getattr(settings, 'api_base_url', '?')} (timeout: {f'{timeout:g}s' if timeout else 'none'})\n"
        f"  Storage: {getattr(settings, 'storage_db_path', '?')} key={state.store.storage_key}\n"
        f"  Todos: {len(todos)} ({done} completed)"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the todo list.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a todo: /add <text> (plain text works too).")
registry.register("toggle", cmd_toggle, help_text="Complete/undo a todo: /toggle <id>.", aliases=["done"])
registry.register("del", cmd_delete, help_text="Delete a todo: /del <id>.", aliases=["rm", "delete"])
registry.register("night", cmd_night, help_text="Night mode: /night | /night on | /night off.")
registry.register("details", cmd_details, help_text="Go to the details screen.")
registry.register("back", cmd_back, help_text="Return to the list.", aliases=["home"])
registry.register("status", cmd_status, help_text="Show API/storage settings and counts.")
