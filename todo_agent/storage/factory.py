"""Backend selection for todo storage."""
from __future__ import annotations

from functools import partial

from ..config import Settings, settings as default_settings
from .base import TodoStore
from .memory import InMemoryTodoStore


def build_store(config: Settings | None = None) -> TodoStore:
    """Create the todo store configured by ``storage_backend``."""
    config = config or default_settings

    if config.storage_backend == "memory":
        return InMemoryTodoStore()

    if config.storage_backend == "google":
        from .auth import get_authorized_client
        from .google_tasks import GoogleTasksTodoStore

        return GoogleTasksTodoStore(
            partial(
                get_authorized_client,
                credentials_path=config.credentials_path,
                token_path=config.token_path,
            ),
            task_list_title=config.task_list_title,
        )

    raise ValueError(f"Unsupported storage backend: {config.storage_backend}")


__all__ = ["build_store"]
