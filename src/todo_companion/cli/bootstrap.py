# src/todo_companion/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations into AppState (storage/remote API/store),
- closes them again on shutdown.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState, ViewState
from ..todos.remote import TodoApiClient
from ..todos.storage import KeyValueStore
from ..todos.store import TodoStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, remote=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings(). `remote` overrides the HTTP client.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    storage = KeyValueStore(settings.storage_db_path)
    if remote is None:
        remote = TodoApiClient(settings.api_base_url, timeout_s=settings.http_timeout_seconds)

    store = TodoStore(storage, remote, storage_key=settings.storage_key)

    return AppState(
        settings=settings,
        store=store,
        view=ViewState(night_mode=settings.night_mode, color=settings.color),
        remote=remote,
        storage=storage,
    )


async def shutdown_state(state: AppState) -> None:
    """Best-effort shutdown: finish pending syncs, close the HTTP client."""
    try:
        await state.store.close()
    except Exception:
        logger.exception("Failed to finish pending remote syncs.")

    aclose = getattr(state.remote, "aclose", None)
    if aclose is not None:
        try:
            await aclose()
        except Exception:
            logger.debug("Remote client close failed.", exc_info=True)

    close = getattr(state.storage, "close", None)
    if close is not None:
        try:
            close()
        except Exception:
            logger.debug("Storage close failed.", exc_info=True)
