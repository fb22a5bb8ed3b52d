# src/todo_companion/todos/remote.py

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://dummyjson.com"


class RemoteApiError(RuntimeError):
    """Any failure talking to the todo API (transport error or non-2xx status)."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


def make_timeout(seconds: float | None) -> httpx.Timeout:
    """
    Build the request timeout.

    None or <= 0 means "no timeout": a hung request simply never resolves.
    """
    if seconds is None or seconds <= 0:
        return httpx.Timeout(None)
    return httpx.Timeout(seconds, connect=min(5.0, seconds))


class TodoApiClient:
    """
    Async client for the demo todo collection:
      GET    /todos
      PUT    /todos/{id}   body {"completed": bool}
      DELETE /todos/{id}

    No auth, no pagination, no schema validation beyond field access.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout_s: float | None = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=make_timeout(timeout_s),
            headers={"Accept": "application/json"},
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(self, method: str, path: str, *, body: Any | None = None) -> Any:
        try:
            resp = await self._client.request(method, path, json=body)
        except httpx.HTTPError as e:
            raise RemoteApiError(f"{method} {path} failed: {e.__class__.__name__}: {e}") from e

        if resp.is_error:
            raise RemoteApiError(f"{method} {path} returned {resp.status_code}", resp.status_code)

        if not resp.content:
            return {}
        try:
            return resp.json()
        except ValueError as e:
            raise RemoteApiError(f"{method} {path} returned non-JSON body", resp.status_code) from e

    async def fetch_todos(self) -> list[dict[str, Any]]:
        payload = await self._request("GET", "/todos")
        todos = payload.get("todos") if isinstance(payload, dict) else None
        if not isinstance(todos, list):
            return []
        logger.debug("Fetched %d todos from %s", len(todos), self.base_url)
        return todos

    async def update_completed(self, todo_id: int, completed: bool) -> dict[str, Any]:
        payload = await self._request("PUT", f"/todos/{int(todo_id)}", body={"completed": bool(completed)})
        return payload if isinstance(payload, dict) else {}

    async def delete_todo(self, todo_id: int) -> dict[str, Any]:
        payload = await self._request("DELETE", f"/todos/{int(todo_id)}")
        return payload if isinstance(payload, dict) else {}
