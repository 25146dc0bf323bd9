"""Graph node factories and helpers."""
from __future__ import annotations

from typing import Any, Dict, List, Sequence

import structlog
from langchain_core.messages import AIMessage, BaseMessage, SystemMessage, ToolMessage
from langgraph.graph import END
from pydantic import ValidationError as PydanticValidationError

from ..errors import (
    AuthorizationError,
    OrchestrationExhaustedError,
    RegistryConsistencyError,
    TodoAgentError,
    ValidationError,
)
from ..models.state import AgentState
from ..tools.todo import ToolRegistry

log = structlog.get_logger()


def requested_calls(message: BaseMessage) -> List[Dict[str, Any]]:
    """Tool calls of ``message``, including those whose arguments failed to parse."""
    if not isinstance(message, AIMessage):
        return []
    return list(message.tool_calls) + list(message.invalid_tool_calls)


def should_continue(state: AgentState):
    """Route to the tools node while the model keeps requesting actions."""
    messages = state["messages"]

    if messages and requested_calls(messages[-1]):
        return "tools"

    return END


def prompt_messages(messages: Sequence[BaseMessage]) -> List[BaseMessage]:
    """Leading system instruction followed by the conversation without system turns."""
    instruction = next((m for m in messages if isinstance(m, SystemMessage)), None)
    conversation = [m for m in messages if not isinstance(m, SystemMessage)]
    return ([instruction] if instruction is not None else []) + conversation


def make_call_model(llm: Any, registry: ToolRegistry, max_iterations: int):
    """Create a call_model node bound to ``llm``."""

    async def call_model(state: AgentState) -> Dict[str, Any]:
        iterations = state.get("iterations", 0)

        if iterations >= max_iterations:
            log.warning("iteration cap reached", max_iterations=max_iterations)
            raise OrchestrationExhaustedError(max_iterations)

        response = await llm.ainvoke(prompt_messages(state["messages"]))

        calls = requested_calls(response)
        # a call without a name cannot be dispatched; it is answered as invalid
        registry.check(call for call in calls if call.get("name"))
        log.debug(
            "model responded",
            iteration=iterations + 1,
            tool_calls=[call.get("name") for call in calls],
        )

        return {"messages": [response], "iterations": iterations + 1}

    return call_model


def _error_result(call: Dict[str, Any], error: Exception) -> ToolMessage:
    return ToolMessage(
        content=f"Error: {type(error).__name__}: {error}",
        tool_call_id=call.get("id") or "",
        name=call.get("name"),
        status="error",
    )


def make_execute_actions(registry: ToolRegistry):
    """Create the tools node that answers every requested action in order.

    Calls whose arguments the model emitted as malformed JSON never reach a
    tool; they are answered with a validation error so the model can retry.
    """

    async def execute_actions(state: AgentState) -> Dict[str, Any]:
        last_message = state["messages"][-1]
        results: List[ToolMessage] = []

        for call in last_message.tool_calls:
            tool = registry.resolve(call["name"])
            try:
                output = await tool.ainvoke(call.get("args") or {})
            except (AuthorizationError, RegistryConsistencyError):
                raise
            except PydanticValidationError as exc:
                error = ValidationError(f"Invalid arguments for {call['name']}: {exc}")
                log.info("tool arguments rejected", tool=call["name"], error=str(exc))
                results.append(_error_result(call, error))
            except TodoAgentError as exc:
                log.info("tool failed", tool=call["name"], error=str(exc))
                results.append(_error_result(call, exc))
            else:
                log.debug("tool executed", tool=call["name"])
                results.append(
                    ToolMessage(
                        content=str(output),
                        tool_call_id=call.get("id") or "",
                        name=call["name"],
                    )
                )

        for call in last_message.invalid_tool_calls:
            detail = call.get("error") or "arguments are not valid JSON"
            error = ValidationError(f"Invalid arguments for {call.get('name')}: {detail}")
            log.info("malformed tool call", tool=call.get("name"), args=call.get("args"))
            results.append(_error_result(call, error))

        return {"messages": results}

    return execute_actions


__all__ = [
    "make_call_model",
    "make_execute_actions",
    "prompt_messages",
    "requested_calls",
    "should_continue",
]
