"""Tests for the HTTP client."""

from unittest.mock import MagicMock

import pytest
import requests

from task_tracker.client import TaskClientError, TasksClient


def _response(status_code, body):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = body
    return response


@pytest.fixture
def session():
    session = MagicMock()
    session.headers = {}
    return session


@pytest.fixture
def api(session):
    return TasksClient("http://api.test/api/", token="tok", timeout=3, session=session)


class TestTasksClient:
    def test_sets_bearer_token(self, api, session):
        assert session.headers["Authorization"] == "Bearer tok"

        api.set_auth_token(None)
        assert "Authorization" not in session.headers

    def test_list_tasks(self, api, session):
        session.request.return_value = _response(200, [{"id": 1, "title": "A"}])

        assert api.list_tasks() == [{"id": 1, "title": "A"}]
        session.request.assert_called_once_with(
            "GET", "http://api.test/api/tasks", json=None, timeout=3
        )

    def test_create_task(self, api, session):
        session.request.return_value = _response(201, {"id": 2, "title": "New"})

        api.create_task("New", "details")

        session.request.assert_called_once_with(
            "POST",
            "http://api.test/api/tasks",
            json={"title": "New", "description": "details"},
            timeout=3,
        )

    def test_toggle_complete_sends_only_completed(self, api, session):
        session.request.return_value = _response(200, {"message": "Task updated successfully"})

        api.toggle_complete(5, True)

        session.request.assert_called_once_with(
            "PUT", "http://api.test/api/tasks/5", json={"completed": True}, timeout=3
        )

    def test_error_carries_operation_and_status(self, api, session):
        session.request.return_value = _response(404, {"error": "Task not found"})

        with pytest.raises(TaskClientError) as exc_info:
            api.delete_task(9)

        assert exc_info.value.message == "Failed to delete task"
        assert exc_info.value.status_code == 404
        assert exc_info.value.detail == "Task not found"

    def test_transport_error(self, api, session):
        session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(TaskClientError) as exc_info:
            api.list_tasks()

        assert exc_info.value.message == "Failed to fetch tasks"
        assert exc_info.value.status_code is None


class TestClientAgainstApp:
    """Drive the real app through the client by routing requests to the test client."""

    def test_full_flow(self, app, db, auth_headers):
        flask_client = app.test_client()

        def request(method, url, json=None, timeout=None):
            path = url.replace("http://app.test", "")
            resp = flask_client.open(path, method=method, json=json, headers=session.headers)
            return _response(resp.status_code, resp.get_json())

        session = MagicMock()
        session.headers = {}
        session.request.side_effect = request

        api = TasksClient("http://app.test/api", session=session)
        api.set_auth_token(auth_headers["Authorization"][7:])

        created = api.create_task("From client")
        api.toggle_complete(created["id"], True)

        assert api.get_task(created["id"])["completed"] is True
        assert [t["title"] for t in api.list_tasks()] == ["From client"]

        with pytest.raises(TaskClientError) as exc_info:
            api.update_task(created["id"])
        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Failed to update task"
