"""State models used by the LangGraph workflow."""
from __future__ import annotations

from operator import add
from typing import Annotated, List, TypedDict


class AgentState(TypedDict):
    """Conversation log plus the number of model calls made so far."""

    messages: Annotated[List, add]
    iterations: int


__all__ = ["AgentState"]
