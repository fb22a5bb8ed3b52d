# tests/test_remote.py

from __future__ import annotations

import json

import httpx
import pytest

from todo_companion.todos.remote import RemoteApiError, TodoApiClient


def _client(handler) -> TodoApiClient:
    transport = httpx.MockTransport(handler)
    http = httpx.AsyncClient(transport=transport, base_url="http://testserver")
    return TodoApiClient("http://testserver", client=http)


@pytest.mark.asyncio
async def test_fetch_todos_reads_todos_field() -> None:
    seen: list[tuple[str, str]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path))
        return httpx.Response(
            200,
            json={"todos": [{"id": 1, "todo": "A", "completed": False}], "total": 1, "skip": 0, "limit": 30},
        )

    api = _client(handler)
    assert await api.fetch_todos() == [{"id": 1, "todo": "A", "completed": False}]
    assert seen == [("GET", "/todos")]


@pytest.mark.asyncio
async def test_fetch_todos_without_field_is_empty() -> None:
    api = _client(lambda request: httpx.Response(200, json={"message": "ok"}))
    assert await api.fetch_todos() == []


@pytest.mark.asyncio
async def test_update_completed_sends_put_body() -> None:
    captured: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["method"] = request.method
        captured["path"] = request.url.path
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": 3, "completed": True})

    api = _client(handler)
    reply = await api.update_completed(3, True)

    assert captured == {"method": "PUT", "path": "/todos/3", "body": {"completed": True}}
    assert reply["completed"] is True


@pytest.mark.asyncio
async def test_delete_todo_uses_delete() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "DELETE"
        assert request.url.path == "/todos/4"
        return httpx.Response(200, json={"id": 4, "isDeleted": True})

    assert (await _client(handler).delete_todo(4))["isDeleted"] is True


@pytest.mark.asyncio
async def test_error_status_raises_remote_api_error() -> None:
    api = _client(lambda request: httpx.Response(404, json={"message": "Todo with id '999' not found"}))

    with pytest.raises(RemoteApiError) as excinfo:
        await api.delete_todo(999)
    assert excinfo.value.status == 404


@pytest.mark.asyncio
async def test_transport_error_raises_remote_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    with pytest.raises(RemoteApiError) as excinfo:
        await _client(handler).fetch_todos()
    assert excinfo.value.status is None
