"""Marshmallow schemas for serialization and validation."""

from task_tracker.schemas.task import TaskCreateSchema, TaskSchema, TaskUpdateSchema


__all__ = ["TaskSchema", "TaskCreateSchema", "TaskUpdateSchema"]
