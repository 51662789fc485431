"""Task CRUD endpoints.

Every route resolves the caller's owner id through ``token_required`` and
hands it to the task service explicitly.
"""

from typing import Any

from flask import Blueprint, jsonify, request
from marshmallow import Schema, ValidationError

from task_tracker.exceptions import InvalidInput, NotFound
from task_tracker.extensions import get_task_service
from task_tracker.middleware.auth import token_required
from task_tracker.schemas import TaskCreateSchema, TaskSchema, TaskUpdateSchema


tasks_bp = Blueprint("tasks", __name__, url_prefix="/api/tasks")


@tasks_bp.route("", methods=["GET"])
@token_required
def list_tasks(owner: str):
    """List the caller's tasks, newest first.

    Returns:
        JSON array of tasks.
    """
    tasks = get_task_service().list_tasks(owner)
    return jsonify(TaskSchema(many=True).dump(tasks))


@tasks_bp.route("/<task_id>", methods=["GET"])
@token_required
def get_task(task_id: str, owner: str):
    """Get one of the caller's tasks.

    Returns:
        JSON task, or 404 if missing or owned by someone else.
    """
    task = get_task_service().get_task(owner, _parse_id(task_id))
    return jsonify(TaskSchema().dump(task))


@tasks_bp.route("", methods=["POST"])
@token_required
def create_task(owner: str):
    """Create a task for the caller.

    Returns:
        JSON task with 201 status.
    """
    data = _load(TaskCreateSchema(), _json_body())
    task = get_task_service().create_task(owner, data["title"], data.get("description"))
    return jsonify(TaskSchema().dump(task)), 201


@tasks_bp.route("/<task_id>", methods=["PUT"])
@token_required
def update_task(task_id: str, owner: str):
    """Apply a partial update to one of the caller's tasks.

    Returns:
        JSON acknowledgement with the updated task.
    """
    task_key = _parse_id(task_id)
    data = _load(TaskUpdateSchema(), _json_body())
    task = get_task_service().update_task(owner, task_key, data)
    return jsonify({"message": "Task updated successfully", "task": TaskSchema().dump(task)})


@tasks_bp.route("/<task_id>", methods=["DELETE"])
@token_required
def delete_task(task_id: str, owner: str):
    """Delete one of the caller's tasks.

    Returns:
        JSON acknowledgement.
    """
    get_task_service().delete_task(owner, _parse_id(task_id))
    return jsonify({"message": "Task deleted successfully"})


def _parse_id(raw: str) -> int:
    # Malformed ids are reported like missing tasks
    if not raw.isascii() or not raw.isdigit():
        raise NotFound("Task not found")
    return int(raw)


def _json_body() -> dict[str, Any]:
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise InvalidInput("Request body must be a JSON object")
    return body


def _load(schema: Schema, body: dict[str, Any]) -> dict[str, Any]:
    try:
        return schema.load(body)
    except ValidationError as err:
        raise InvalidInput(_first_message(err.messages), details=err.messages) from err


def _first_message(messages: Any) -> str:
    """Pick one human-readable message out of marshmallow's error dict."""
    while isinstance(messages, (dict, list)) and messages:
        messages = next(iter(messages.values())) if isinstance(messages, dict) else messages[0]
    return str(messages).rstrip(".") if messages else "Invalid input"
