"""In-memory task store.

Data lives for the lifetime of the process.
"""

import itertools
import threading
from dataclasses import replace
from datetime import datetime
from typing import Any

from task_tracker.stores.base import TaskRecord, TaskStore


class MemoryTaskStore(TaskStore):
    """Dict-backed store guarded by a single lock."""

    name = "in-memory"

    def __init__(self) -> None:
        self._tasks: dict[int, TaskRecord] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def insert(self, owner: str, title: str, description: str, now: datetime) -> TaskRecord:
        with self._lock:
            record = TaskRecord(
                id=next(self._ids),
                title=title,
                description=description,
                completed=False,
                owner=owner,
                created_at=now,
                updated_at=now,
            )
            self._tasks[record.id] = record
            return record

    def list_by_owner(self, owner: str) -> list[TaskRecord]:
        with self._lock:
            owned = [task for task in self._tasks.values() if task.owner == owner]
        return sorted(owned, key=lambda task: (task.created_at, task.id), reverse=True)

    def get(self, task_id: int, owner: str) -> TaskRecord | None:
        with self._lock:
            return self._find(task_id, owner)

    def update(
        self, task_id: int, owner: str, changes: dict[str, Any], now: datetime
    ) -> TaskRecord | None:
        with self._lock:
            current = self._find(task_id, owner)
            if current is None:
                return None
            updated = replace(current, **changes, updated_at=max(current.updated_at, now))
            self._tasks[task_id] = updated
            return updated

    def delete(self, task_id: int, owner: str) -> bool:
        with self._lock:
            if self._find(task_id, owner) is None:
                return False
            del self._tasks[task_id]
            return True

    def _find(self, task_id: int, owner: str) -> TaskRecord | None:
        task = self._tasks.get(task_id)
        if task is None or task.owner != owner:
            return None
        return task
