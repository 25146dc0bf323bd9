"""Tests for the todo tool surface"""

import json

import pytest
from pydantic import ValidationError as PydanticValidationError

from todo_agent.errors import NotFoundError, RegistryConsistencyError
from todo_agent.tools.todo import TodoAction, ToolRegistry, build_todo_tools


class TestTodoTools:
    """Each tool wraps exactly one store primitive"""

    def test_tool_names_match_actions(self, store):
        tools = build_todo_tools(store)

        assert {action: tool.name for action, tool in tools.items()} == {
            TodoAction.GET_TODOS: "get_todos",
            TodoAction.ADD_TODO: "add_todo",
            TodoAction.MARK_TODO_AS_DONE: "mark_todo_as_done",
        }

    def test_schemas(self, store):
        tools = build_todo_tools(store)

        assert not tools[TodoAction.GET_TODOS].args
        assert set(tools[TodoAction.ADD_TODO].args) == {"title"}
        assert set(tools[TodoAction.MARK_TODO_AS_DONE].args) == {"title"}

    @pytest.mark.asyncio
    async def test_get_todos_serializes_list(self, store):
        tools = build_todo_tools(store)
        await store.add("Milch kaufen")
        await store.add("Brot backen")
        await store.mark_done("Brot backen")

        output = await tools[TodoAction.GET_TODOS].ainvoke({})

        assert json.loads(output) == [
            {"title": "Milch kaufen", "isDone": False},
            {"title": "Brot backen", "isDone": True},
        ]

    @pytest.mark.asyncio
    async def test_get_todos_keeps_umlauts(self, store):
        tools = build_todo_tools(store)
        await store.add("Müll rausbringen")

        assert "Müll rausbringen" in await tools[TodoAction.GET_TODOS].ainvoke({})

    @pytest.mark.asyncio
    async def test_add_and_mark_done(self, store):
        tools = build_todo_tools(store)

        await tools[TodoAction.ADD_TODO].ainvoke({"title": "Milch kaufen"})
        await tools[TodoAction.MARK_TODO_AS_DONE].ainvoke({"title": "Milch kaufen"})

        assert store.mutations == [("add", "Milch kaufen"), ("mark_done", "Milch kaufen")]
        assert (await store.list())[0].is_done is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("args", [{}, {"title": ""}, {"title": 42}])
    async def test_invalid_arguments_rejected_before_store(self, store, args):
        tools = build_todo_tools(store)

        with pytest.raises(PydanticValidationError):
            await tools[TodoAction.ADD_TODO].ainvoke(args)
        assert store.mutations == []

    @pytest.mark.asyncio
    async def test_mark_done_missing_raises_not_found(self, store):
        tools = build_todo_tools(store)

        with pytest.raises(NotFoundError):
            await tools[TodoAction.MARK_TODO_AS_DONE].ainvoke({"title": "Eier"})


class TestToolRegistry:
    """Closed mapping from action names to tools"""

    def test_resolve_known_names(self, store):
        registry = ToolRegistry.for_store(store)

        assert registry.resolve("add_todo").name == "add_todo"
        assert [tool.name for tool in registry.tools] == [
            "get_todos",
            "add_todo",
            "mark_todo_as_done",
        ]

    def test_unknown_name_is_rejected(self, store):
        registry = ToolRegistry.for_store(store)

        with pytest.raises(RegistryConsistencyError) as exc_info:
            registry.resolve("delete_todo")
        assert exc_info.value.tool_name == "delete_todo"

    def test_check_rejects_batch_with_unknown_name(self, store):
        registry = ToolRegistry.for_store(store)

        with pytest.raises(RegistryConsistencyError):
            registry.check([{"name": "get_todos"}, {"name": "rm_rf"}])

    def test_incomplete_mapping_rejected(self, store):
        tools = build_todo_tools(store)
        del tools[TodoAction.GET_TODOS]

        with pytest.raises(ValueError):
            ToolRegistry(tools)
