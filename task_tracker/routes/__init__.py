"""API route blueprints."""

from task_tracker.routes.health import health_bp
from task_tracker.routes.tasks import tasks_bp


__all__ = ["health_bp", "tasks_bp"]
