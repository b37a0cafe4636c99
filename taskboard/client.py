"""HTTP client for the task API.

Mirrors what UI code needs: listing never raises (a failed load is reported
as an explicit fallback result), while writes raise ``TaskClientError``.
"""
import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

import requests

logger = logging.getLogger(__name__)

API_BASE = "/api"


class TaskClientError(Exception):
    """A request to the task API failed (network error or non-2xx status)."""


class LoadStatus(str, enum.Enum):
    LOADED = "loaded"
    EMPTY = "empty"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class TaskListResult:
    status: LoadStatus
    tasks: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is not LoadStatus.FALLBACK


@dataclass(frozen=True)
class TaskResult:
    status: LoadStatus
    task: Dict[str, Any]
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is not LoadStatus.FALLBACK


def placeholder_task(task_id: str) -> Dict[str, Any]:
    return {"id": task_id, "title": "Error loading task", "description": "", "complete": False}


def _error_detail(response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return f"HTTP {response.status_code}"


class TaskClient:
    """Client for ``/api/tasks``.

    ``session`` defaults to a fresh ``requests.Session``; anything with a
    compatible ``request(method, url, **kwargs)`` works. ``timeout`` is only
    passed to ``requests`` sessions.
    """

    def __init__(self, base_url: str = "", session=None, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}{API_BASE}{path}"

    def _request(self, method: str, path: str, failure: str, **kwargs) -> Any:
        url = self._url(path)
        try:
            if isinstance(self.session, requests.Session):
                kwargs["timeout"] = self.timeout
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, url, exc)
            raise TaskClientError(failure) from exc

        if not 200 <= response.status_code < 300:
            logger.error("%s %s -> %s: %s", method, url, response.status_code, _error_detail(response))
            raise TaskClientError(failure)

        try:
            return response.json()
        except ValueError as exc:
            logger.error("%s %s returned a non-JSON body", method, url)
            raise TaskClientError(failure) from exc

    def load_tasks(self, complete: Optional[Union[bool, str]] = None) -> TaskListResult:
        """Load all tasks, degrading to an empty fallback result on failure."""
        params = {}
        if complete is not None:
            if isinstance(complete, bool):
                complete = "true" if complete else "false"
            params["complete"] = complete

        try:
            tasks = self._request("GET", "/tasks", "Failed to fetch tasks", params=params)
        except TaskClientError as exc:
            logger.error("Error loading tasks, falling back to an empty list: %s", exc)
            return TaskListResult(LoadStatus.FALLBACK, [], str(exc))

        if not isinstance(tasks, list):
            logger.error("Error loading tasks: expected a list, got %s", type(tasks).__name__)
            return TaskListResult(LoadStatus.FALLBACK, [], "Failed to fetch tasks")

        logger.debug("Tasks fetched: %d", len(tasks))
        return TaskListResult(LoadStatus.LOADED if tasks else LoadStatus.EMPTY, tasks)

    def load_task(self, task_id: str) -> TaskResult:
        """Load one task, substituting a placeholder task on failure."""
        try:
            task = self._request("GET", f"/tasks/{task_id}", f"Failed to fetch task with ID {task_id}")
        except TaskClientError as exc:
            logger.error("Error loading task %s: %s", task_id, exc)
            return TaskResult(LoadStatus.FALLBACK, placeholder_task(task_id), str(exc))
        return TaskResult(LoadStatus.LOADED, task)

    def create_task(self, task_data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/tasks", "Failed to create task", json=task_data)

    def update_task(self, task_id: str, task_data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request(
            "PUT", f"/tasks/{task_id}", f"Failed to update task with ID {task_id}", json=task_data
        )

    def delete_task(self, task_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/tasks/{task_id}", f"Failed to delete task with ID {task_id}")
