"""Exception hierarchy for the todo agent.

Action level errors (:class:`ValidationError`, :class:`NotFoundError`,
:class:`BackendError`) are returned to the model as tool results. The
remaining errors stop the run and reach the caller.
"""
from __future__ import annotations


class TodoAgentError(Exception):
    """Base class for all todo agent errors."""


class ValidationError(TodoAgentError):
    """Raised when tool arguments or store input are malformed."""


class NotFoundError(TodoAgentError):
    """Raised when a todo or the backing task list does not exist."""


class BackendError(TodoAgentError):
    """Raised when the remote backend rejects or fails a request."""


class AuthorizationError(TodoAgentError):
    """Raised when the remote backend cannot be authorized."""


class OrchestrationExhaustedError(TodoAgentError):
    """Raised when the agent keeps requesting tools past the iteration cap."""

    def __init__(self, max_iterations: int) -> None:
        super().__init__(
            f"Model still requested tools after {max_iterations} calls"
        )
        self.max_iterations = max_iterations


class RegistryConsistencyError(TodoAgentError):
    """Raised when the model requests a tool that is not registered."""

    def __init__(self, tool_name: str) -> None:
        super().__init__(f"Unknown tool requested by the model: {tool_name!r}")
        self.tool_name = tool_name


__all__ = [
    "AuthorizationError",
    "BackendError",
    "NotFoundError",
    "OrchestrationExhaustedError",
    "RegistryConsistencyError",
    "TodoAgentError",
    "ValidationError",
]
