# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_companion.core.state import AppState, ViewState
from todo_companion.todos.storage import KeyValueStore
from todo_companion.todos.store import TodoStore

from .fakes import FakeTodoApi


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the commands.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="todo",
        log_level="INFO",
        api_base_url="http://testserver",
        http_timeout_seconds=None,
        data_dir=tmp_path,
        storage_db_path=tmp_path / "storage.sqlite3",
        storage_key="todos",
        night_mode=False,
        color=False,
    )


@pytest.fixture()
def storage(settings: SimpleNamespace) -> KeyValueStore:
    return KeyValueStore(settings.storage_db_path)


@pytest.fixture()
def api() -> FakeTodoApi:
    return FakeTodoApi(remote_todos=[{"id": 1, "todo": "A", "completed": False, "userId": 7}])


@pytest.fixture()
def store(storage: KeyValueStore, api: FakeTodoApi) -> TodoStore:
    return TodoStore(storage, api, storage_key="todos")


@pytest.fixture()
def state(settings: SimpleNamespace, store: TodoStore, api: FakeTodoApi, storage: KeyValueStore) -> AppState:
    """AppState wired with the fake remote and a real SQLite storage file."""
    return AppState(
        settings=settings,
        store=store,
        view=ViewState(color=False),
        remote=api,
        storage=storage,
    )
