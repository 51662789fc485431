"""Database models."""

from task_tracker.models.task import Task


__all__ = ["Task"]
