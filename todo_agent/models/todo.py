"""Todo models and helpers."""
from __future__ import annotations

import json
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field


class Todo(BaseModel):
    """A single entry of the user's todo list, keyed by its exact title."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = Field(description="Title of the todo, unique and case-sensitive.")
    is_done: bool = Field(
        default=False,
        alias="isDone",
        description="Whether the todo has been marked as done.",
    )


def render_todos(todos: Iterable[Todo]) -> str:
    """Serialize ``todos`` the way the model sees them."""
    return json.dumps(
        [todo.model_dump(by_alias=True) for todo in todos],
        ensure_ascii=False,
    )


__all__ = ["Todo", "render_todos"]
