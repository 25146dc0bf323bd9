"""Todo tools exposed to the language model."""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping

from langchain_core.tools import BaseTool, StructuredTool
from pydantic import BaseModel, Field

from ..errors import RegistryConsistencyError
from ..models.todo import render_todos
from ..storage.base import TodoStore


class TodoAction(str, Enum):
    """Closed set of actions the model may request."""

    GET_TODOS = "get_todos"
    ADD_TODO = "add_todo"
    MARK_TODO_AS_DONE = "mark_todo_as_done"


class NoArgs(BaseModel):
    """Tool without parameters."""


class TitleArgs(BaseModel):
    title: str = Field(min_length=1, description="The title of the todo.")


def build_todo_tools(store: TodoStore) -> Dict[TodoAction, BaseTool]:
    """Wrap each primitive of ``store`` as a schema-described tool."""

    async def get_todos() -> str:
        return render_todos(await store.list())

    async def add_todo(title: str) -> str:
        await store.add(title)
        return f"Added todo: {title}"

    async def mark_todo_as_done(title: str) -> str:
        await store.mark_done(title)
        return f"Marked todo as done: {title}"

    return {
        TodoAction.GET_TODOS: StructuredTool.from_function(
            coroutine=get_todos,
            name=TodoAction.GET_TODOS.value,
            description="Gets the todos from the user's todo list.",
            args_schema=NoArgs,
        ),
        TodoAction.ADD_TODO: StructuredTool.from_function(
            coroutine=add_todo,
            name=TodoAction.ADD_TODO.value,
            description="Adds a todo to the user's todo list.",
            args_schema=TitleArgs,
        ),
        TodoAction.MARK_TODO_AS_DONE: StructuredTool.from_function(
            coroutine=mark_todo_as_done,
            name=TodoAction.MARK_TODO_AS_DONE.value,
            description="Marks a todo as done in the user's todo list.",
            args_schema=TitleArgs,
        ),
    }


class ToolRegistry:
    """Fixed mapping from :class:`TodoAction` to its tool."""

    def __init__(self, tools: Mapping[TodoAction, BaseTool]) -> None:
        missing = set(TodoAction) - set(tools)
        if missing:
            names = ", ".join(sorted(action.value for action in missing))
            raise ValueError(f"Missing tools for actions: {names}")
        self._tools = dict(tools)

    @classmethod
    def for_store(cls, store: TodoStore) -> "ToolRegistry":
        return cls(build_todo_tools(store))

    @property
    def tools(self) -> List[BaseTool]:
        return [self._tools[action] for action in TodoAction]

    def parse(self, name: str) -> TodoAction:
        try:
            return TodoAction(name)
        except ValueError:
            raise RegistryConsistencyError(name) from None

    def resolve(self, name: str) -> BaseTool:
        return self._tools[self.parse(name)]

    def check(self, tool_calls: Iterable[Mapping[str, Any]]) -> None:
        """Reject a batch of tool calls if any name is outside the registry."""
        for call in tool_calls:
            self.parse(call.get("name", ""))


__all__ = [
    "NoArgs",
    "TitleArgs",
    "TodoAction",
    "ToolRegistry",
    "build_todo_tools",
]
