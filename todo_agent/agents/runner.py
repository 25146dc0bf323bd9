"""Caller-facing entry point that runs the todo agent to a final answer."""
from __future__ import annotations

import asyncio
from typing import Any, AsyncIterator, List, Sequence, Tuple

import structlog
from langchain_core.messages import AIMessage, BaseMessage, SystemMessage
from langgraph.errors import GraphRecursionError

from ..config import Settings, settings as default_settings
from ..errors import OrchestrationExhaustedError
from ..graph.builder import create_agent, recursion_limit_for
from ..prompts.system import build_system_prompt
from ..storage.base import TodoStore
from ..tools.todo import ToolRegistry

log = structlog.get_logger()


class TodoAgent:
    """Todo assistant bound to one store and one chat model.

    The store is injected, so several agents can share it or each keep their
    own. ``llm`` is any LangChain chat model supporting ``bind_tools``.
    """

    def __init__(
        self,
        llm: Any,
        store: TodoStore,
        config: Settings | None = None,
        system_prompt: str | None = None,
    ) -> None:
        self.config = config or default_settings
        self.store = store
        self.registry = ToolRegistry.for_store(store)
        self.system_prompt = system_prompt or build_system_prompt(
            self.config.response_language
        )
        self.max_iterations = self.config.max_iterations
        self.llm = llm.bind_tools(self.registry.tools)
        self.app = create_agent(self.llm, self.registry, self.max_iterations)

    def seed(self, history: Sequence[BaseMessage] = ()) -> List[BaseMessage]:
        """Prefix ``history`` with the system instruction unless it has one."""
        messages = list(history)
        if messages and isinstance(messages[0], SystemMessage):
            return messages
        return [SystemMessage(content=self.system_prompt)] + messages

    async def stream(
        self, history: Sequence[BaseMessage] = ()
    ) -> AsyncIterator[Tuple[str, List[BaseMessage]]]:
        """Yield ``(node, new_messages)`` after every step of the loop.

        ``node`` is ``"agent"`` for a model response and ``"tools"`` for the
        results of the actions it requested.
        """
        state = {"messages": self.seed(history), "iterations": 0}
        config = {"recursion_limit": recursion_limit_for(self.max_iterations)}

        try:
            async for update in self.app.astream(state, config, stream_mode="updates"):
                for node, delta in update.items():
                    yield node, list((delta or {}).get("messages", []))
        except GraphRecursionError as exc:
            raise OrchestrationExhaustedError(self.max_iterations) from exc

    async def run(self, history: Sequence[BaseMessage] = ()) -> List[BaseMessage]:
        """Run the agent until it answers without tool calls.

        Returns the full history including the system instruction, every
        tool request and result, and the final answer. The caller's sequence
        is not modified.
        """
        messages = self.seed(history)
        model_calls = 0
        async for node, new_messages in self.stream(history):
            model_calls += node == "agent"
            messages.extend(new_messages)

        log.info("agent run finished", model_calls=model_calls)
        return messages

    async def respond(self, history: Sequence[BaseMessage] = ()) -> AIMessage:
        """Run the agent and return only its final answer."""
        messages = await self.run(history)
        return messages[-1]

    def run_sync(self, history: Sequence[BaseMessage] = ()) -> List[BaseMessage]:
        return asyncio.run(self.run(history))


__all__ = ["TodoAgent"]
