"""Pytest fixtures and shared utilities"""

from typing import Callable, List, Sequence, Union

import pytest
from langchain_core.messages import AIMessage, BaseMessage

from todo_agent.config import Settings
from todo_agent.storage.memory import InMemoryTodoStore


def tool_call(name: str, call_id: str, **args) -> dict:
    return {"name": name, "args": args, "id": call_id, "type": "tool_call"}


def request(*calls: dict) -> AIMessage:
    """AI message asking for ``calls``"""
    return AIMessage(content="", tool_calls=list(calls))


class ScriptedChatModel:
    """Stand-in chat model that replays prepared responses.

    ``script`` is either a list of messages returned in order or a callable
    producing the response for a given call index.
    """

    def __init__(self, script: Union[Sequence[AIMessage], Callable[[int], AIMessage]]):
        self.script = script
        self.calls: List[List[BaseMessage]] = []
        self.bound_tools = None

    def bind_tools(self, tools):
        self.bound_tools = list(tools)
        return self

    async def ainvoke(self, messages, config=None, **kwargs):
        index = len(self.calls)
        self.calls.append(list(messages))
        if callable(self.script):
            return self.script(index)
        return self.script[index]


class RecordingTodoStore(InMemoryTodoStore):
    """In-memory store that records every mutation"""

    def __init__(self):
        super().__init__()
        self.mutations = []

    async def add(self, title):
        self.mutations.append(("add", title))
        await super().add(title)

    async def mark_done(self, title):
        self.mutations.append(("mark_done", title))
        await super().mark_done(title)


@pytest.fixture
def store() -> RecordingTodoStore:
    return RecordingTodoStore()


@pytest.fixture
def config() -> Settings:
    return Settings(max_iterations=5, response_language="Deutsch", storage_backend="memory")
