# src/todo_companion/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable

from ..cli.commands import registry as command_registry
from ..core.state import AppState, Screen
from ..ui.screens import render_details, render_home, render_loading

logger = logging.getLogger(__name__)

LineReader = Callable[[str], Awaitable[str]]
Writer = Callable[[str], None]

PROMPT = ">>> "


async def _read_line_in_thread(prompt: str) -> str:
    # input() blocks; run it off-loop so remote syncs keep resolving meanwhile.
    return await asyncio.to_thread(input, prompt)


def _write_stdout(text: str) -> None:
    print(text, flush=True)


def render_current(state: AppState) -> str:
    if not state.store.loaded:
        return render_loading()
    if state.view.screen == Screen.DETAILS:
        return render_details(state.view)
    return render_home(state.store.todos(), state.view)


async def handle_line(state: AppState, line: str) -> str:
    """
    Route one line of user input.

    Slash commands go to the registry; anything else is treated as new todo text
    (type, then Enter == "Add Todo").
    """
    cmd_response = await command_registry.handle(state, line)
    if cmd_response is not None:
        return cmd_response

    state.view.draft = line
    return await command_registry.handle(state, "/add") or ""


async def run_console_loop(
    state: AppState,
    *,
    read_line: LineReader | None = None,
    write: Writer | None = None,
) -> None:
    read_line = read_line or _read_line_in_thread
    write = write or _write_stdout

    if state.view.color and not sys.stdout.isatty():
        state.view.color = False

    logger.info("Console connector started.")
    write(render_loading())
    await state.store.load()
    write(render_current(state))
    write("Type a todo and press Enter to add it. Use /help for commands. Use /exit to quit.\n")

    while True:
        try:
            user_input = (await read_line(PROMPT)).strip()
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

        try:
            response = await handle_line(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        if response:
            write(response)
        write(render_current(state))

    logger.info("Console connector finished.")
