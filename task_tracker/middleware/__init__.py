"""Middleware modules."""

from task_tracker.middleware.auth import token_required
from task_tracker.middleware.metrics import register_metrics_middleware


__all__ = ["token_required", "register_metrics_middleware"]
