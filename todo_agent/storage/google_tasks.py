"""Todo storage backed by a Google Tasks task list."""
from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional

import structlog
from google.auth.exceptions import GoogleAuthError
from googleapiclient.errors import HttpError

from ..errors import AuthorizationError, BackendError, NotFoundError
from ..models.todo import Todo
from .base import TodoStore, require_title

log = structlog.get_logger()

COMPLETED = "completed"
NEEDS_ACTION = "needsAction"


class GoogleTasksTodoStore(TodoStore):
    """Adapter mapping todo titles onto tasks of one Google task list.

    ``client_factory`` returns an authorized Tasks v1 service. It is called
    lazily on first use, so the consent flow only runs when the store is
    actually touched. Every operation re-reads the list from the API because
    other clients may change it at any time.
    """

    def __init__(
        self,
        client_factory: Callable[[], Any],
        task_list_title: Optional[str] = None,
    ) -> None:
        self._client_factory = client_factory
        self._task_list_title = task_list_title
        self._service: Any = None

    async def list(self) -> List[Todo]:
        return await self._run(self._list_sync)

    async def add(self, title: str) -> None:
        require_title(title)
        await self._run(self._add_sync, title)

    async def mark_done(self, title: str) -> None:
        await self._run(self._mark_done_sync, title)

    async def _run(self, func: Callable[..., Any], *args: Any) -> Any:
        try:
            return await asyncio.to_thread(func, *args)
        except GoogleAuthError as exc:
            raise AuthorizationError(f"Google credentials rejected: {exc}") from exc
        except HttpError as exc:
            if exc.resp.status == 401:
                raise AuthorizationError(f"Google credentials rejected: {exc}") from exc
            raise BackendError(f"Google Tasks request failed: {exc}") from exc

    # -- blocking helpers, run in a worker thread ---------------------------

    def _get_service(self) -> Any:
        if self._service is None:
            self._service = self._client_factory()
        return self._service

    def _get_task_list(self) -> Dict[str, Any]:
        service = self._get_service()
        response = service.tasklists().list(maxResults=10).execute()
        task_lists = response.get("items") or []

        if self._task_list_title is not None:
            task_lists = [
                item for item in task_lists if item.get("title") == self._task_list_title
            ]
            if not task_lists:
                raise NotFoundError(f"No task list found with title: {self._task_list_title}")
        if not task_lists:
            raise NotFoundError("No task list found.")

        task_list = task_lists[0]
        if not task_list.get("id"):
            raise NotFoundError("Task list has no id.")
        return task_list

    def _get_tasks(self, list_id: str) -> List[Dict[str, Any]]:
        service = self._get_service()
        response = (
            service.tasks()
            .list(tasklist=list_id, showCompleted=True, showHidden=True)
            .execute()
        )
        return [task for task in response.get("items") or [] if task.get("title")]

    def _find_task(self, list_id: str, title: str) -> Optional[Dict[str, Any]]:
        for task in self._get_tasks(list_id):
            if task["title"] == title:
                return task
        return None

    def _list_sync(self) -> List[Todo]:
        task_list = self._get_task_list()
        todos: Dict[str, bool] = {}
        for task in self._get_tasks(task_list["id"]):
            todos[task["title"]] = task.get("status") == COMPLETED
        return [Todo(title=title, is_done=done) for title, done in todos.items()]

    def _add_sync(self, title: str) -> None:
        task_list = self._get_task_list()
        existing = self._find_task(task_list["id"], title)
        service = self._get_service()

        if existing is None:
            service.tasks().insert(
                tasklist=task_list["id"],
                body={"title": title, "status": NEEDS_ACTION},
            ).execute()
            log.info("task inserted", task_list=task_list["id"], title=title)
            return

        if existing.get("status") != NEEDS_ACTION:
            self._update_status(task_list["id"], existing, NEEDS_ACTION)
        log.info("task re-added, reset to open", task_list=task_list["id"], title=title)

    def _mark_done_sync(self, title: str) -> None:
        task_list = self._get_task_list()
        task = self._find_task(task_list["id"], title)
        if task is None:
            raise NotFoundError(f"No task found with title: {title}")
        if not task.get("id"):
            raise NotFoundError(f"No task ID found for task with title: {title}")
        self._update_status(task_list["id"], task, COMPLETED)
        log.info("task completed", task_list=task_list["id"], title=title)

    def _update_status(self, list_id: str, task: Dict[str, Any], status: str) -> None:
        body = {**task, "status": status}
        if status == NEEDS_ACTION:
            # the API keeps the task completed while a completion date is set
            body.pop("completed", None)
        try:
            self._get_service().tasks().update(
                tasklist=list_id,
                task=task["id"],
                body=body,
            ).execute()
        except HttpError as exc:
            if exc.resp.status == 404:
                raise NotFoundError(f"Task disappeared: {task.get('title')}") from exc
            raise


__all__ = ["GoogleTasksTodoStore"]
