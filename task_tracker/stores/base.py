"""Task store interface and record type."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


# Fields a patch may change. id, owner and created_at are immutable.
MUTABLE_FIELDS = ("title", "description", "completed")


@dataclass(frozen=True)
class TaskRecord:
    """Immutable snapshot of a stored task."""

    id: int
    title: str
    description: str
    completed: bool
    owner: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, row: Any) -> "TaskRecord":
        """Build a record from a ``Task`` model instance.

        Some databases (SQLite) drop tzinfo on the way back; those values
        were written as UTC.
        """
        return cls(
            id=row.id,
            title=row.title,
            description=row.description,
            completed=bool(row.completed),
            owner=row.owner,
            created_at=_as_utc(row.created_at),
            updated_at=_as_utc(row.updated_at),
        )


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class TaskStore(ABC):
    """Persistence for task records.

    Every method that addresses a single task is scoped by ``(task_id, owner)``;
    a task owned by someone else behaves exactly like a missing one.
    Implementations must apply each mutation atomically per record.
    """

    name = "abstract"

    @abstractmethod
    def insert(self, owner: str, title: str, description: str, now: datetime) -> TaskRecord:
        """Persist a new incomplete task and return it with its assigned id."""

    @abstractmethod
    def list_by_owner(self, owner: str) -> list[TaskRecord]:
        """Return the owner's tasks, newest first (ties: highest id first)."""

    @abstractmethod
    def get(self, task_id: int, owner: str) -> TaskRecord | None:
        """Return the task, or None if absent or owned by someone else."""

    @abstractmethod
    def update(
        self, task_id: int, owner: str, changes: dict[str, Any], now: datetime
    ) -> TaskRecord | None:
        """Apply ``changes`` and stamp ``updated_at``.

        ``updated_at`` never moves backwards: it becomes the later of its
        current value and ``now``.

        Returns:
            The updated record, or None if absent or owned by someone else.
        """

    @abstractmethod
    def delete(self, task_id: int, owner: str) -> bool:
        """Remove the task. Returns False if absent or owned by someone else."""
