"""Error handlers with OpenTelemetry trace context."""

import logging

from flask import Flask, jsonify
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
from werkzeug.exceptions import HTTPException

from task_tracker.exceptions import InvalidInput, StoreFailure, TaskTrackerError


logger = logging.getLogger(__name__)


def error_response(message: str, status_code: int) -> tuple:
    """Create error response with trace context.

    Use this function in routes and middleware instead of returning
    jsonify directly.

    Args:
        message: Error message.
        status_code: HTTP status code.

    Returns:
        Tuple of (response, status_code).
    """
    return _make_error_response(message, status_code)


def register_error_handlers(app: Flask) -> None:
    """Register error handlers on Flask app.

    Args:
        app: Flask application instance.
    """

    @app.errorhandler(InvalidInput)
    def invalid_input(error: InvalidInput):
        _tag_span(error.error_type, 400)
        return _make_error_response(error.message, 400, details=error.details)

    @app.errorhandler(StoreFailure)
    def store_failure(error: StoreFailure):
        span = trace.get_current_span()
        if span.is_recording():
            span.set_status(Status(StatusCode.ERROR, str(error)))
            span.record_exception(error)
        _tag_span(error.error_type, 500)
        logger.error(f"Store failure: {error}", exc_info=error)
        return _make_error_response("Internal server error", 500)

    @app.errorhandler(TaskTrackerError)
    def task_tracker_error(error: TaskTrackerError):
        _tag_span(error.error_type, error.status_code)
        return _make_error_response(error.message, error.status_code)

    @app.errorhandler(400)
    def bad_request(error):
        return _make_error_response("Bad request", 400)

    @app.errorhandler(401)
    def unauthorized(error):
        return _make_error_response("Unauthorized", 401)

    @app.errorhandler(404)
    def not_found(error):
        return _make_error_response("Not found", 404)

    @app.errorhandler(405)
    def method_not_allowed(error):
        return _make_error_response("Method not allowed", 405)

    @app.errorhandler(500)
    def internal_error(error):
        return _make_error_response("Internal server error", 500)

    @app.errorhandler(Exception)
    def unhandled_exception(error: Exception):
        if isinstance(error, HTTPException):
            return _make_error_response(error.name, error.code or 500)

        span = trace.get_current_span()
        if span.is_recording():
            span.set_status(Status(StatusCode.ERROR, str(error)))
            span.record_exception(error)
            span.set_attribute("error.type", "unhandled_exception")
        logger.exception(f"Unhandled exception: {error}")
        return _make_error_response("Internal server error", 500)


def _tag_span(error_type: str, status_code: int) -> None:
    span = trace.get_current_span()
    if span.is_recording():
        span.set_attribute("error.type", error_type)
        span.set_attribute("http.status_code", status_code)


def _make_error_response(message: str, status_code: int, details: dict | None = None) -> tuple:
    """Create error response with trace context.

    Args:
        message: Error message.
        status_code: HTTP status code.
        details: Optional per-field validation messages.

    Returns:
        Tuple of (response, status_code).
    """
    response = {
        "error": message,
        "status": status_code,
    }
    if details:
        response["details"] = details

    # Add trace ID for debugging
    span = trace.get_current_span()
    span_context = span.get_span_context()
    if span_context.is_valid:
        response["trace_id"] = format(span_context.trace_id, "032x")

    return jsonify(response), status_code
