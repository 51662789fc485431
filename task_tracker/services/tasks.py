"""Task service: ownership and field rules on top of a task store.

Every call takes the owner explicitly. A task that belongs to someone else
is reported exactly like a task that does not exist.
"""

import logging
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any

from task_tracker.exceptions import InvalidInput, NotFound, Unauthenticated
from task_tracker.stores.base import MUTABLE_FIELDS, TaskRecord, TaskStore
from task_tracker.telemetry import get_meter, get_tracer


logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)
meter = get_meter(__name__)

tasks_created = meter.create_counter(
    name="tasks.created",
    description="Tasks created",
    unit="1",
)

tasks_updated = meter.create_counter(
    name="tasks.updated",
    description="Tasks updated",
    unit="1",
)

tasks_deleted = meter.create_counter(
    name="tasks.deleted",
    description="Tasks deleted",
    unit="1",
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TaskService:
    """CRUD operations on tasks, scoped to an owner.

    Args:
        store: Backend that persists the records.
        clock: Source of timestamps. Defaults to timezone-aware UTC now.
    """

    def __init__(self, store: TaskStore, clock: Callable[[], datetime] = utcnow) -> None:
        self.store = store
        self.clock = clock

    def list_tasks(self, owner: str) -> list[TaskRecord]:
        """Return all of the owner's tasks, newest first."""
        _require_owner(owner)
        with tracer.start_as_current_span("task.list") as span:
            tasks = self.store.list_by_owner(owner)
            span.set_attribute("task.count", len(tasks))
            return tasks

    def get_task(self, owner: str, task_id: int) -> TaskRecord:
        """Return one task.

        Raises:
            NotFound: If the task is missing or owned by someone else.
        """
        _require_owner(owner)
        with tracer.start_as_current_span("task.get") as span:
            span.set_attribute("task.id", task_id)
            task = self.store.get(task_id, owner)
            if task is None:
                raise NotFound("Task not found")
            return task

    def create_task(self, owner: str, title: Any, description: Any = None) -> TaskRecord:
        """Create an incomplete task for the owner.

        Raises:
            InvalidInput: If the title is missing or empty, or the
                description is not a string.
        """
        _require_owner(owner)
        if title is None or title == "":
            raise InvalidInput("Title is required")
        if not isinstance(title, str):
            raise InvalidInput("Title must be a string")
        if description is None:
            description = ""
        elif not isinstance(description, str):
            raise InvalidInput("Description must be a string")

        with tracer.start_as_current_span("task.create") as span:
            task = self.store.insert(owner, title, description, self.clock())

            span.set_attribute("task.id", task.id)
            tasks_created.add(1)
            logger.info(f"Task created: {task.id}", extra={"owner": owner})

            return task

    def update_task(self, owner: str, task_id: int, patch: Mapping[str, Any]) -> TaskRecord:
        """Apply a partial update and return the updated task.

        Only ``title``, ``description`` and ``completed`` can change; other
        keys are ignored.

        Raises:
            InvalidInput: If no field is supplied, the title is empty, or a
                value has the wrong type.
            NotFound: If the task is missing or owned by someone else.
        """
        _require_owner(owner)
        changes = _validate_patch(patch)

        with tracer.start_as_current_span("task.update") as span:
            span.set_attribute("task.id", task_id)
            span.set_attribute("task.fields", sorted(changes))

            task = self.store.update(task_id, owner, changes, self.clock())
            if task is None:
                raise NotFound("Task not found")

            tasks_updated.add(1)
            logger.info(f"Task updated: {task_id}", extra={"owner": owner})

            return task

    def delete_task(self, owner: str, task_id: int) -> None:
        """Delete a task permanently.

        Raises:
            NotFound: If the task is missing or owned by someone else.
        """
        _require_owner(owner)
        with tracer.start_as_current_span("task.delete") as span:
            span.set_attribute("task.id", task_id)

            if not self.store.delete(task_id, owner):
                raise NotFound("Task not found")

            tasks_deleted.add(1)
            logger.info(f"Task deleted: {task_id}", extra={"owner": owner})


def _require_owner(owner: str) -> None:
    if not owner:
        raise Unauthenticated("Missing owner identity")


def _validate_patch(patch: Mapping[str, Any]) -> dict[str, Any]:
    changes = {field: patch[field] for field in MUTABLE_FIELDS if field in patch}
    if not changes:
        raise InvalidInput("No fields to update")

    if "title" in changes:
        title = changes["title"]
        if not isinstance(title, str):
            raise InvalidInput("Title must be a string")
        if title == "":
            raise InvalidInput("Title cannot be empty")
    if "description" in changes and not isinstance(changes["description"], str):
        raise InvalidInput("Description must be a string")
    if "completed" in changes and not isinstance(changes["completed"], bool):
        raise InvalidInput("Completed must be a boolean")

    return changes
