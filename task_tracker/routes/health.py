"""Health check and index endpoints."""

import logging
from datetime import datetime, timezone
from typing import Any

from flask import Blueprint, current_app, jsonify
from sqlalchemy import text

from task_tracker.extensions import db, get_task_service


logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__)


@health_bp.route("/", methods=["GET"])
def index():
    """Describe the API for anyone hitting the root URL."""
    return jsonify(
        {
            "message": "Task Tracker API",
            "health": "/api/health",
            "docs": "/api/tasks",
        }
    )


@health_bp.route("/api/health", methods=["GET"])
def health_check():
    """Health check endpoint for monitoring.

    Always answers 200; component problems are reported in the payload.

    Returns:
        JSON response with service status.
    """
    store = get_task_service().store

    health_status: dict[str, Any] = {
        "status": "OK",
        "message": "Task Tracker API is running",
        "environment": current_app.config.get("APP_ENV", "development"),
        "database": store.name,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "components": {},
    }

    if store.name == "sql":
        try:
            db.session.execute(text("SELECT 1"))
            health_status["components"]["database"] = "healthy"
        except Exception:
            logger.warning("Health check: database unreachable", exc_info=True)
            health_status["status"] = "DEGRADED"
            health_status["components"]["database"] = "unhealthy"

    return jsonify(health_status)
