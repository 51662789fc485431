"""Pytest fixtures for Flask application testing."""

import os

import pytest


# Disable OpenTelemetry for tests
os.environ["OTEL_SDK_DISABLED"] = "true"


@pytest.fixture
def app():
    """Create test application backed by in-memory SQLite."""
    from task_tracker import create_app
    from task_tracker.config import TestConfig

    app = create_app(TestConfig)

    yield app


@pytest.fixture
def memory_app():
    """Create test application backed by the in-memory store."""
    from task_tracker import create_app
    from task_tracker.config import TestConfig

    class MemoryConfig(TestConfig):
        TASK_STORE = "memory"

    return create_app(MemoryConfig)


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def db(app):
    """Create test database."""
    from task_tracker.extensions import db as _db

    with app.app_context():
        _db.create_all()
        yield _db
        _db.drop_all()


@pytest.fixture
def make_headers(app):
    """Build authorization headers for an arbitrary owner."""
    from task_tracker.services.identity import generate_token

    def _make(owner: str) -> dict[str, str]:
        with app.app_context():
            return {"Authorization": f"Bearer {generate_token(owner)}"}

    return _make


@pytest.fixture
def auth_headers(make_headers):
    """Authorization headers for the default test user."""
    return make_headers("user-alice")


@pytest.fixture
def other_headers(make_headers):
    """Authorization headers for a second user."""
    return make_headers("user-bob")
