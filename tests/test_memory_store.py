"""Tests for the in-memory todo store"""

import asyncio
import threading

import pytest

from todo_agent.errors import NotFoundError, ValidationError
from todo_agent.models.todo import Todo
from todo_agent.storage.memory import InMemoryTodoStore


class TestInMemoryTodoStore:
    """Contract of the process-local store"""

    @pytest.mark.asyncio
    async def test_add_creates_open_todo(self):
        store = InMemoryTodoStore()
        await store.add("Milch kaufen")

        assert await store.list() == [Todo(title="Milch kaufen", is_done=False)]

    @pytest.mark.asyncio
    async def test_list_keeps_insertion_order(self):
        store = InMemoryTodoStore()
        for title in ["B", "A", "C"]:
            await store.add(title)

        assert [todo.title for todo in await store.list()] == ["B", "A", "C"]

    @pytest.mark.asyncio
    async def test_mark_done_sets_flag(self):
        store = InMemoryTodoStore()
        await store.add("Milch kaufen")
        await store.add("Brot backen")
        await store.mark_done("Milch kaufen")

        todos = {todo.title: todo.is_done for todo in await store.list()}
        assert todos == {"Milch kaufen": True, "Brot backen": False}

    @pytest.mark.asyncio
    async def test_mark_done_missing_title_leaves_state_unchanged(self):
        store = InMemoryTodoStore()
        await store.add("Milch kaufen")
        before = await store.list()

        with pytest.raises(NotFoundError):
            await store.mark_done("Eier kaufen")

        assert await store.list() == before

    @pytest.mark.asyncio
    async def test_titles_are_case_sensitive(self):
        store = InMemoryTodoStore()
        await store.add("milch")

        with pytest.raises(NotFoundError):
            await store.mark_done("Milch")

    @pytest.mark.asyncio
    async def test_duplicate_add_does_not_raise_and_reopens(self):
        store = InMemoryTodoStore()
        await store.add("Milch kaufen")
        await store.mark_done("Milch kaufen")
        await store.add("Milch kaufen")

        assert await store.list() == [Todo(title="Milch kaufen", is_done=False)]
        assert len(store) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title", ["", "   "])
    async def test_empty_title_rejected(self, title):
        store = InMemoryTodoStore()

        with pytest.raises(ValidationError):
            await store.add(title)
        assert await store.list() == []

    @pytest.mark.asyncio
    async def test_list_returns_snapshot(self):
        store = InMemoryTodoStore()
        await store.add("A")
        snapshot = await store.list()
        await store.add("B")

        assert [todo.title for todo in snapshot] == ["A"]

    @pytest.mark.asyncio
    async def test_separate_instances_are_isolated(self):
        first, second = InMemoryTodoStore(), InMemoryTodoStore()
        await first.add("A")

        assert await second.list() == []

    @pytest.mark.asyncio
    async def test_operation_sequence(self):
        """list() reflects the last add/mark_done for every title"""
        store = InMemoryTodoStore()
        expected = {}
        operations = [
            ("add", "A"), ("add", "B"), ("mark_done", "A"),
            ("add", "C"), ("mark_done", "C"), ("add", "A"),
        ]
        for op, title in operations:
            await getattr(store, op)(title)
            expected[title] = op == "mark_done"

        assert {todo.title: todo.is_done for todo in await store.list()} == expected


class TestInMemoryConcurrency:
    """Concurrent writers and readers; each thread drives its own event loop"""

    def test_concurrent_add_and_list_never_see_partial_entries(self):
        store = InMemoryTodoStore()
        titles = [f"todo-{i}" for i in range(200)]
        observed = []
        errors = []

        def writer():
            for title in titles:
                asyncio.run(store.add(title))

        def reader():
            try:
                for _ in range(200):
                    observed.append(asyncio.run(store.list()))
            except Exception as exc:  # pragma: no cover - surfaced below
                errors.append(exc)

        threads = [threading.Thread(target=writer)] + [
            threading.Thread(target=reader) for _ in range(3)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert not errors
        for snapshot in observed:
            seen = [todo.title for todo in snapshot]
            # every snapshot is a prefix of the insertion sequence
            assert seen == titles[: len(seen)]
            assert all(todo.is_done is False for todo in snapshot)

        assert [todo.title for todo in store.snapshot()] == titles

    def test_concurrent_mark_done_is_not_lost(self):
        store = InMemoryTodoStore()
        titles = [f"todo-{i}" for i in range(50)]
        for title in titles:
            asyncio.run(store.add(title))

        def worker(chunk):
            for title in chunk:
                asyncio.run(store.mark_done(title))

        threads = [
            threading.Thread(target=worker, args=(titles[i::5],)) for i in range(5)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert all(todo.is_done for todo in store.snapshot())
