"""Storage interface shared by all todo backends."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from ..errors import ValidationError
from ..models.todo import Todo


class TodoStore(ABC):
    """Owns the canonical todo list.

    Implementations must not raise when ``add`` is called with a title that
    already exists, and must raise :class:`~todo_agent.errors.NotFoundError`
    from ``mark_done`` when the title (or the list itself) is missing.
    """

    @abstractmethod
    async def list(self) -> List[Todo]:
        """Return every known todo with its current done flag."""

    @abstractmethod
    async def add(self, title: str) -> None:
        """Insert ``title`` as an open todo."""

    @abstractmethod
    async def mark_done(self, title: str) -> None:
        """Mark the todo called exactly ``title`` as done."""


def require_title(title: str) -> str:
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("Todo title cannot be empty")
    return title


__all__ = ["TodoStore", "require_title"]
