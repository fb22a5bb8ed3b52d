# tests/test_todo_store.py

from __future__ import annotations

import asyncio
import json

import pytest

from todo_companion.todos.models import TodoNotFoundError
from todo_companion.todos.storage import KeyValueStore
from todo_companion.todos.store import TodoStore

from .fakes import FakeTodoApi, stored_todos


@pytest.mark.asyncio
async def test_first_load_fetches_remote_and_caches(store: TodoStore, api: FakeTodoApi, storage) -> None:
    todos = await store.load()

    assert store.loaded
    assert [(t.id, t.todo, t.completed) for t in todos] == [(1, "A", False)]
    assert api.methods() == ["GET"]
    assert stored_todos(storage) == [{"id": 1, "todo": "A", "completed": False, "userId": 7}]


@pytest.mark.asyncio
async def test_load_prefers_local_storage(storage: KeyValueStore, api: FakeTodoApi) -> None:
    storage.set_item("todos", json.dumps([{"id": 5, "todo": "cached", "completed": True}]))
    store = TodoStore(storage, api)

    todos = await store.load()

    assert api.calls == []
    assert [(t.id, t.todo, t.completed) for t in todos] == [(5, "cached", True)]


@pytest.mark.asyncio
async def test_cached_empty_list_is_still_a_cache_hit(storage: KeyValueStore, api: FakeTodoApi) -> None:
    storage.set_item("todos", "[]")
    store = TodoStore(storage, api)

    assert await store.load() == []
    assert api.calls == []


@pytest.mark.asyncio
async def test_load_fetch_error_leaves_empty_unpersisted_list(storage: KeyValueStore) -> None:
    api = FakeTodoApi(fail_fetch=True)
    store = TodoStore(storage, api)

    assert await store.load() == []
    assert store.loaded
    assert storage.get_item("todos") is None


@pytest.mark.asyncio
async def test_corrupt_cache_falls_back_to_remote(storage: KeyValueStore, api: FakeTodoApi) -> None:
    storage.set_item("todos", "{not json")
    store = TodoStore(storage, api)

    todos = await store.load()

    assert api.methods() == ["GET"]
    assert [t.todo for t in todos] == ["A"]


@pytest.mark.asyncio
async def test_add_appends_unchecked_task_without_remote_call(store: TodoStore, api: FakeTodoApi, storage) -> None:
    await store.load()
    before = len(store)

    todo = await store.add("  B  ")

    assert len(store) == before + 1
    assert (todo.id, todo.todo, todo.completed) == (2, "B", False)
    assert api.methods() == ["GET"]
    assert stored_todos(storage)[-1] == {"id": 2, "todo": "B", "completed": False}


@pytest.mark.asyncio
async def test_add_rejects_blank_text(store: TodoStore) -> None:
    await store.load()
    with pytest.raises(ValueError):
        await store.add("   ")
    assert len(store) == 1


@pytest.mark.asyncio
async def test_add_after_delete_reuses_id(store: TodoStore) -> None:
    await store.load()
    b = await store.add("B")
    assert b.id == 2

    assert await store.delete(1)
    c = await store.add("C")

    # count + 1 collides with the surviving "B".
    assert c.id == 2
    assert [t.id for t in store.todos()] == [2, 2]


@pytest.mark.asyncio
async def test_toggle_is_optimistic_then_applies_server_value(store: TodoStore, api: FakeTodoApi, storage) -> None:
    await store.load()
    api.gate = asyncio.Event()

    task = await store.toggle(1)

    # Local write happens before the server answers.
    assert store.get(1).completed is True
    assert stored_todos(storage)[0]["completed"] is True

    api.reported_completed = False
    api.gate.set()
    await task

    assert api.calls[-1].body == {"completed": True}
    assert store.get(1).completed is False
    assert stored_todos(storage)[0]["completed"] is False


@pytest.mark.asyncio
async def test_toggle_twice_restores_original_value(store: TodoStore, storage) -> None:
    await store.load()

    await (await store.toggle(1))
    assert stored_todos(storage)[0]["completed"] is True

    await (await store.toggle(1))
    assert store.get(1).completed is False
    assert stored_todos(storage)[0]["completed"] is False


@pytest.mark.asyncio
async def test_toggle_remote_failure_keeps_optimistic_state(store: TodoStore, api: FakeTodoApi, storage) -> None:
    await store.load()
    api.fail_update = True

    task = await store.toggle(1)
    await task

    assert task.exception() is None
    assert store.get(1).completed is True
    assert stored_todos(storage)[0]["completed"] is True


@pytest.mark.asyncio
async def test_toggle_unknown_id_raises(store: TodoStore, api: FakeTodoApi) -> None:
    await store.load()
    with pytest.raises(TodoNotFoundError):
        await store.toggle(99)
    assert "PUT" not in api.methods()


@pytest.mark.asyncio
async def test_toggle_reply_after_delete_is_ignored(store: TodoStore, api: FakeTodoApi, storage) -> None:
    await store.load()
    api.gate = asyncio.Event()

    task = await store.toggle(1)
    assert await store.delete(1)
    api.gate.set()
    await task

    assert store.todos() == []
    assert stored_todos(storage) == []


@pytest.mark.asyncio
async def test_delete_success_removes_from_persisted_state(store: TodoStore, api: FakeTodoApi, storage) -> None:
    await store.load()

    assert await store.delete(1) is True

    assert api.calls[-1].method == "DELETE"
    assert all(t["id"] != 1 for t in stored_todos(storage))


@pytest.mark.asyncio
async def test_delete_remote_failure_keeps_task(store: TodoStore, api: FakeTodoApi, storage) -> None:
    await store.load()
    api.fail_delete = True

    assert await store.delete(1) is False

    assert store.get(1) is not None
    assert [t["id"] for t in stored_todos(storage)] == [1]


@pytest.mark.asyncio
async def test_wait_pending_drains_background_syncs(store: TodoStore, api: FakeTodoApi) -> None:
    await store.load()
    api.gate = asyncio.Event()

    await store.toggle(1)
    api.gate.set()
    await store.wait_pending()

    assert api.methods().count("PUT") == 1
    assert store.get(1).completed is True
