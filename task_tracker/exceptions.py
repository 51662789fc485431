"""Domain exceptions raised by the task service and its collaborators.

The API layer is the only place these are turned into HTTP responses
(see ``task_tracker.errors``).
"""

from typing import Any


class TaskTrackerError(Exception):
    """Base class for all task tracker errors."""

    status_code = 500
    error_type = "internal"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInput(TaskTrackerError):
    """Caller-supplied data violates a field constraint."""

    status_code = 400
    error_type = "validation"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details = details


class Unauthenticated(TaskTrackerError):
    """Bearer token is missing, malformed or rejected."""

    status_code = 401
    error_type = "authentication"


class NotFound(TaskTrackerError):
    """Task does not exist or is not owned by the caller."""

    status_code = 404
    error_type = "not_found"


class StoreFailure(TaskTrackerError):
    """Underlying persistence layer failed."""

    status_code = 500
    error_type = "server_error"
