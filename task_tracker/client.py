"""HTTP client for the task tracker API.

Mirrors the single-page app's API module: one session carrying the bearer
token, one method per endpoint. Failures raise TaskClientError with a
message naming the operation family; nothing is retried.
"""

import logging
import os
from typing import Any

import requests


logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:5000/api"


class TaskClientError(Exception):
    """A task API call failed.

    Attributes:
        status_code: HTTP status, or None if the server was not reached.
        detail: The server's ``error`` text, if any.
    """

    def __init__(self, message: str, status_code: int | None = None, detail: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail

    def __str__(self) -> str:
        parts = [self.message]
        if self.status_code is not None:
            parts.append(f"(HTTP {self.status_code})")
        if self.detail:
            parts.append(f": {self.detail}")
        return " ".join(parts)


class TasksClient:
    """Client for the ``/api/tasks`` endpoints."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = (base_url or os.getenv("TASK_TRACKER_API_URL", DEFAULT_API_URL)).rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers["Content-Type"] = "application/json"
        self.set_auth_token(token)

    def set_auth_token(self, token: str | None) -> None:
        """Set or clear the bearer token sent with every request."""
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"
        else:
            self.session.headers.pop("Authorization", None)

    def list_tasks(self) -> list[dict[str, Any]]:
        return self._request("GET", "/tasks", failure="Failed to fetch tasks")

    def get_task(self, task_id: int) -> dict[str, Any]:
        return self._request("GET", f"/tasks/{task_id}", failure="Failed to fetch task")

    def create_task(self, title: str, description: str | None = None) -> dict[str, Any]:
        payload: dict[str, Any] = {"title": title}
        if description is not None:
            payload["description"] = description
        return self._request("POST", "/tasks", json=payload, failure="Failed to create task")

    def update_task(self, task_id: int, **fields: Any) -> dict[str, Any]:
        """Send a partial update; only the given fields change."""
        return self._request(
            "PUT", f"/tasks/{task_id}", json=fields, failure="Failed to update task"
        )

    def toggle_complete(self, task_id: int, completed: bool) -> dict[str, Any]:
        return self.update_task(task_id, completed=completed)

    def delete_task(self, task_id: int) -> dict[str, Any]:
        return self._request("DELETE", f"/tasks/{task_id}", failure="Failed to delete task")

    def health(self) -> dict[str, Any]:
        return self._request("GET", "/health", failure="Failed to reach API")

    def _request(self, method: str, path: str, failure: str, json: Any = None) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(method, url, json=json, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TaskClientError(failure, detail=str(exc)) from exc

        if not response.ok:
            raise TaskClientError(failure, response.status_code, _error_detail(response))
        return response.json()


def _error_detail(response: requests.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return response.text or None
    if isinstance(body, dict):
        return body.get("error")
    return None
