# src/todo_companion/todos/store.py

from __future__ import annotations

import asyncio
import json
import logging

from ..core.ports import KeyValueRepo, TodoRemote
from .models import Todo, TodoNotFoundError
from .remote import RemoteApiError

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "todos"


class TodoStore:
    """
    Ordered in-memory todo list, mirrored to a local key-value slot and,
    best-effort, to the remote collection.

    Sync model:
    - local storage is the source of truth once populated; the remote list is
      fetched only when the slot is empty
    - toggle is optimistic: local write first, remote PUT in a background task,
      the server's `completed` is applied when it answers; no rollback on failure
    - delete is remote-first: local state changes only after the remote DELETE
      succeeds
    - add is local-only (id = count + 1, so freed ids can be reused)

    All methods must be called from the same event loop.
    """

    def __init__(
        self,
        storage: KeyValueRepo,
        remote: TodoRemote,
        *,
        storage_key: str = DEFAULT_STORAGE_KEY,
    ) -> None:
        self._storage = storage
        self._remote = remote
        self._key = storage_key
        self._todos: list[Todo] = []
        self._loaded = False
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def storage_key(self) -> str:
        return self._key

    # ---- read API ----

    def todos(self) -> list[Todo]:
        """Snapshot copy of the current list (safe to hold across awaits)."""
        return [Todo(t.id, t.todo, t.completed, t.user_id) for t in self._todos]

    def get(self, todo_id: int) -> Todo | None:
        for t in self._todos:
            if t.id == todo_id:
                return Todo(t.id, t.todo, t.completed, t.user_id)
        return None

    def __len__(self) -> int:
        return len(self._todos)

    # ---- persistence helpers ----

    def _persist(self) -> None:
        payload = json.dumps([t.to_dict() for t in self._todos], ensure_ascii=False)
        self._storage.set_item(self._key, payload)

    @staticmethod
    def _decode(raw: object) -> list[Todo]:
        if not isinstance(raw, list):
            raise ValueError(f"expected a JSON array, got {type(raw).__name__}")
        out: list[Todo] = []
        for item in raw:
            try:
                out.append(Todo.from_dict(item))
            except ValueError:
                logger.warning("Skipping malformed todo record: %r", item)
        return out

    def _read_cached(self) -> list[Todo] | None:
        raw = self._storage.get_item(self._key)
        if not raw:
            return None
        try:
            return self._decode(json.loads(raw))
        except ValueError:
            logger.exception("Stored todo list under key=%s is corrupt; ignoring it.", self._key)
            return None

    def _find(self, todo_id: int) -> Todo:
        for t in self._todos:
            if t.id == todo_id:
                return t
        raise TodoNotFoundError(todo_id)

    # ---- operations ----

    async def load(self) -> list[Todo]:
        """
        Startup load: local slot first, remote fetch only when the slot is empty.

        Remote errors are logged and leave the list empty (nothing is persisted,
        so the next start tries again).
        """
        cached = self._read_cached()
        if cached is not None:
            self._todos = cached
            logger.info("Loaded %d todos from local storage.", len(cached))
        else:
            try:
                fetched = self._decode(await self._remote.fetch_todos())
            except (RemoteApiError, ValueError):
                logger.exception("Error fetching todos; starting with an empty list.")
                fetched = None

            if fetched is not None:
                self._todos = fetched
                self._persist()
                logger.info("Fetched %d todos from remote and cached them.", len(fetched))

        self._loaded = True
        return self.todos()

    async def toggle(self, todo_id: int) -> asyncio.Task[None]:
        """
        Flip `completed` locally, persist, then mirror to the remote.

        Returns the background sync task. Awaiting it is optional; it never raises
        for remote failures (they are logged and the optimistic state stays).
        """
        todo = self._find(todo_id)
        todo.completed = not todo.completed
        self._persist()
        logger.debug("Toggled todo id=%s -> completed=%s (optimistic)", todo_id, todo.completed)

        task = asyncio.create_task(
            self._sync_toggle(todo_id, todo.completed), name=f"todo-toggle-{todo_id}"
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _sync_toggle(self, todo_id: int, completed: bool) -> None:
        try:
            reply = await self._remote.update_completed(todo_id, completed)
        except RemoteApiError as e:
            logger.warning("Remote toggle failed id=%s (keeping local state): %s", todo_id, e)
            return
        except Exception:
            logger.exception("Remote toggle crashed id=%s (keeping local state)", todo_id)
            return

        reported = reply.get("completed")
        if not isinstance(reported, bool):
            logger.debug("Remote toggle reply for id=%s has no completed flag: %r", todo_id, reply)
            return

        try:
            todo = self._find(todo_id)
        except TodoNotFoundError:
            # Deleted while the request was in flight.
            return

        todo.completed = reported
        self._persist()
        logger.info("Todo id=%s synced: completed=%s", todo_id, reported)

    async def delete(self, todo_id: int) -> bool:
        """
        Remote-first delete. Returns True if the task was removed locally.

        On remote failure nothing changes locally and False is returned.
        """
        try:
            await self._remote.delete_todo(todo_id)
        except RemoteApiError as e:
            logger.warning("Remote delete failed id=%s (local list unchanged): %s", todo_id, e)
            return False

        self._todos = [t for t in self._todos if t.id != todo_id]
        self._persist()
        logger.info("Todo id=%s deleted.", todo_id)
        return True

    async def add(self, text: str) -> Todo:
        """
        Append a new task locally (never sent to the remote).

        The id is `count + 1`, which can collide with an existing id after a delete.
        """
        text = (text or "").strip()
        if not text:
            raise ValueError("todo text is required")

        todo = Todo(id=len(self._todos) + 1, todo=text, completed=False)
        self._todos.append(todo)
        self._persist()
        logger.info("Todo id=%s added.", todo.id)
        return Todo(todo.id, todo.todo, todo.completed)

    async def wait_pending(self) -> None:
        """Wait for every in-flight remote sync (shutdown/tests)."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def close(self) -> None:
        await self.wait_pending()
