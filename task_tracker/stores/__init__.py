"""Task storage backends."""

from task_tracker.stores.base import TaskRecord, TaskStore
from task_tracker.stores.memory import MemoryTaskStore
from task_tracker.stores.sql import SQLTaskStore


__all__ = ["TaskRecord", "TaskStore", "MemoryTaskStore", "SQLTaskStore", "create_store"]


def create_store(kind: str) -> TaskStore:
    """Build the store backend named by the ``TASK_STORE`` setting.

    Args:
        kind: Either ``"sql"`` or ``"memory"``.

    Returns:
        A new store instance.

    Raises:
        ValueError: If the backend name is unknown.
    """
    if kind == "sql":
        return SQLTaskStore()
    if kind == "memory":
        return MemoryTaskStore()
    raise ValueError(f"Unknown TASK_STORE backend: {kind!r}")
