"""Flask application factory with OpenTelemetry instrumentation."""

import logging
import os

from flask import Flask

from task_tracker.extensions import db, ma


def create_app(config_class: type | None = None) -> Flask:
    """Create and configure the Flask application.

    The task store and identity verifier are chosen by the ``TASK_STORE``
    and ``AUTH_PROVIDER`` settings and shared through ``app.extensions``.

    Args:
        config_class: Configuration class to use. Defaults to Config.

    Returns:
        Configured Flask application instance.
    """
    # Initialize telemetry BEFORE creating Flask app
    if not os.getenv("OTEL_SDK_DISABLED"):
        from task_tracker.telemetry import get_otel_log_handler, instrument_flask_app, setup_telemetry

        setup_telemetry()

    app = Flask(__name__)

    # Instrument Flask app (needed for Gunicorn worker forks)
    if not os.getenv("OTEL_SDK_DISABLED"):
        instrument_flask_app(app)

    # Load configuration
    if config_class is None:
        from task_tracker.config import Config

        config_class = Config
    app.config.from_object(config_class)

    # Initialize extensions
    db.init_app(app)
    ma.init_app(app)

    # Wire the task service to its store and the token verifier
    from task_tracker.services import TaskService, create_verifier
    from task_tracker.stores import create_store

    store = create_store(app.config["TASK_STORE"])
    app.extensions["task_tracker"] = {
        "service": TaskService(store),
        "verifier": create_verifier(app.config),
    }

    # Register blueprints
    from task_tracker.routes.health import health_bp
    from task_tracker.routes.tasks import tasks_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(tasks_bp)

    # Register error handlers
    from task_tracker.errors import register_error_handlers

    register_error_handlers(app)

    from task_tracker.cli import register_commands

    register_commands(app)

    # Register metrics middleware
    if not os.getenv("OTEL_SDK_DISABLED"):
        from task_tracker.middleware.metrics import register_metrics_middleware

        register_metrics_middleware(app)

    # Attach OTel log handler after app setup
    if not os.getenv("OTEL_SDK_DISABLED"):
        handler = get_otel_log_handler()
        if handler:
            root_logger = logging.getLogger()
            if handler not in root_logger.handlers:
                root_logger.addHandler(handler)

    # Configure logging
    _configure_logging()

    # Create database tables
    if store.name == "sql":
        with app.app_context():
            db.create_all()

    app.logger.info(
        f"Task tracker ready: store={store.name} auth={app.config['AUTH_PROVIDER']}"
    )

    return app


def _configure_logging() -> None:
    """Configure logging for the application."""
    # App loggers - propagate to root (where OTel handler is)
    logging.getLogger("task_tracker").setLevel(logging.DEBUG)
    logging.getLogger("task_tracker").propagate = True

    # Reduce noise from framework loggers
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("werkzeug").propagate = False

    # SQLAlchemy engine logs can be noisy
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
