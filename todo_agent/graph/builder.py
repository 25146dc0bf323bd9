"""Utilities for assembling the LangGraph agent."""
from __future__ import annotations

from typing import Any

from langgraph.graph import END, StateGraph

from ..models.state import AgentState
from ..tools.todo import ToolRegistry
from .nodes import make_call_model, make_execute_actions, should_continue


def recursion_limit_for(max_iterations: int) -> int:
    """LangGraph step budget that always outlasts ``max_iterations`` model calls."""
    # one agent step and one tools step per iteration, plus the final agent step
    return 2 * max_iterations + 5


def create_agent(llm: Any, registry: ToolRegistry, max_iterations: int):
    """Create the compiled LangGraph application.

    ``llm`` must already have the registry's tools bound to it.
    """
    workflow = StateGraph(AgentState)
    workflow.add_node("agent", make_call_model(llm, registry, max_iterations))
    workflow.add_node("tools", make_execute_actions(registry))

    workflow.set_entry_point("agent")

    workflow.add_conditional_edges(
        "agent",
        should_continue,
        {
            "tools": "tools",
            END: END,
        },
    )

    workflow.add_edge("tools", "agent")

    return workflow.compile()


__all__ = ["create_agent", "recursion_limit_for"]
