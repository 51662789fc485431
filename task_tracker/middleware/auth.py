"""Bearer token authentication middleware."""

from functools import wraps
from typing import Callable

from flask import request

from task_tracker.errors import error_response
from task_tracker.exceptions import Unauthenticated
from task_tracker.extensions import get_identity_verifier


def token_required(f: Callable) -> Callable:
    """Decorator to require a valid bearer token.

    The resolved owner id is passed to the view as the ``owner`` keyword
    argument. Returns 401 if the token is missing or rejected.
    """

    @wraps(f)
    def decorated(*args, **kwargs):
        auth_header = request.headers.get("Authorization", "")

        if not auth_header.startswith("Bearer "):
            return error_response("Missing Authorization header", 401)

        token = auth_header[7:].strip()  # Remove "Bearer " prefix
        if not token:
            return error_response("Missing Authorization header", 401)

        try:
            owner = get_identity_verifier().verify(token)
        except Unauthenticated as exc:
            return error_response(exc.message, 401)

        return f(*args, owner=owner, **kwargs)

    return decorated
