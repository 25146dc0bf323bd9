"""Process-local todo storage."""
from __future__ import annotations

import threading
from typing import Dict, List

import structlog

from ..errors import NotFoundError
from ..models.todo import Todo
from .base import TodoStore, require_title

log = structlog.get_logger()


class InMemoryTodoStore(TodoStore):
    """Insertion-ordered todo list kept in a dict.

    A single lock guards every read and write, so concurrent sessions (or
    other threads touching the same instance) never observe a half-applied
    update.
    """

    def __init__(self) -> None:
        self._items: Dict[str, bool] = {}
        self._lock = threading.Lock()

    async def list(self) -> List[Todo]:
        return self.snapshot()

    async def add(self, title: str) -> None:
        require_title(title)
        with self._lock:
            existed = title in self._items
            self._items[title] = False
        if existed:
            log.info("todo re-added, reset to open", title=title)
        else:
            log.debug("todo added", title=title)

    async def mark_done(self, title: str) -> None:
        with self._lock:
            if title not in self._items:
                raise NotFoundError(f"No todo found with title: {title}")
            self._items[title] = True
        log.debug("todo marked done", title=title)

    def snapshot(self) -> List[Todo]:
        """Synchronous copy of the current list."""
        with self._lock:
            items = list(self._items.items())
        return [Todo(title=title, is_done=done) for title, done in items]

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


__all__ = ["InMemoryTodoStore"]
