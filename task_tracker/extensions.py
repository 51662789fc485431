"""Flask extensions initialization."""

from flask import current_app
from flask_marshmallow import Marshmallow
from flask_sqlalchemy import SQLAlchemy


# SQLAlchemy database instance
db = SQLAlchemy()

# Marshmallow serialization instance
ma = Marshmallow()


def get_task_service():
    """Return the TaskService bound to the current app."""
    return current_app.extensions["task_tracker"]["service"]


def get_identity_verifier():
    """Return the IdentityVerifier bound to the current app."""
    return current_app.extensions["task_tracker"]["verifier"]
