"""Tests for task endpoints."""

import pytest


def _create_task(client, headers, title="Test Task", description="Desc"):
    return client.post(
        "/api/tasks",
        json={"title": title, "description": description},
        headers=headers,
    )


class TestAuthentication:
    @pytest.mark.parametrize(
        "method,path",
        [
            ("get", "/api/tasks"),
            ("post", "/api/tasks"),
            ("get", "/api/tasks/1"),
            ("put", "/api/tasks/1"),
            ("delete", "/api/tasks/1"),
        ],
    )
    def test_missing_token(self, client, db, method, path):
        response = getattr(client, method)(path)
        assert response.status_code == 401
        assert response.get_json()["error"] == "Missing Authorization header"

    def test_invalid_token(self, client, db):
        response = client.get("/api/tasks", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401
        assert response.get_json()["error"] == "Invalid or expired token"

    def test_wrong_scheme(self, client, db):
        response = client.get("/api/tasks", headers={"Authorization": "Basic abc"})
        assert response.status_code == 401

    def test_token_signed_with_other_secret(self, client, db):
        import jwt

        token = jwt.encode(
            {"sub": "user-alice", "exp": 9999999999},
            "another-secret-entirely-32-bytes!",
            algorithm="HS256",
        )
        response = client.get("/api/tasks", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401


class TestListTasks:
    def test_list_tasks_empty(self, client, db, auth_headers):
        response = client.get("/api/tasks", headers=auth_headers)
        assert response.status_code == 200
        assert response.get_json() == []

    def test_list_tasks_newest_first(self, client, db, auth_headers):
        for title in ("A", "B", "C"):
            _create_task(client, auth_headers, title=title)

        response = client.get("/api/tasks", headers=auth_headers)
        assert [t["title"] for t in response.get_json()] == ["C", "B", "A"]

    def test_list_only_own_tasks(self, client, db, auth_headers, other_headers):
        _create_task(client, auth_headers, title="Alice's")
        _create_task(client, other_headers, title="Bob's")

        response = client.get("/api/tasks", headers=other_headers)
        assert [t["title"] for t in response.get_json()] == ["Bob's"]


class TestCreateTask:
    def test_create_task(self, client, db, auth_headers):
        response = _create_task(client, auth_headers, title="New Task")
        assert response.status_code == 201
        data = response.get_json()
        assert data["title"] == "New Task"
        assert data["description"] == "Desc"
        assert data["completed"] is False
        assert data["owner"] == "user-alice"
        assert data["created_at"] == data["updated_at"]
        assert isinstance(data["id"], int)

    def test_create_without_description(self, client, db, auth_headers):
        response = client.post("/api/tasks", json={"title": "Bare"}, headers=auth_headers)
        assert response.status_code == 201
        assert response.get_json()["description"] == ""

    def test_create_missing_title(self, client, db, auth_headers):
        response = client.post("/api/tasks", json={"description": "x"}, headers=auth_headers)
        assert response.status_code == 400
        data = response.get_json()
        assert data["error"] == "Title is required"
        assert "title" in data["details"]

        assert client.get("/api/tasks", headers=auth_headers).get_json() == []

    def test_create_with_null_description(self, client, db, auth_headers):
        response = client.post(
            "/api/tasks", json={"title": "t", "description": None}, headers=auth_headers
        )
        assert response.status_code == 201
        assert response.get_json()["description"] == ""

    def test_create_empty_title(self, client, db, auth_headers):
        response = client.post("/api/tasks", json={"title": ""}, headers=auth_headers)
        assert response.status_code == 400

    def test_create_without_body(self, client, db, auth_headers):
        response = client.post("/api/tasks", headers=auth_headers)
        assert response.status_code == 400

    def test_create_non_object_body(self, client, db, auth_headers):
        response = client.post("/api/tasks", json=["title"], headers=auth_headers)
        assert response.status_code == 400
        assert response.get_json()["error"] == "Request body must be a JSON object"

    def test_client_cannot_choose_owner(self, client, db, auth_headers):
        response = client.post(
            "/api/tasks",
            json={"title": "Mine", "owner": "user-bob", "completed": True},
            headers=auth_headers,
        )
        data = response.get_json()
        assert data["owner"] == "user-alice"
        assert data["completed"] is False


class TestGetTask:
    def test_get_task(self, client, db, auth_headers):
        task_id = _create_task(client, auth_headers).get_json()["id"]

        response = client.get(f"/api/tasks/{task_id}", headers=auth_headers)
        assert response.status_code == 200
        assert response.get_json()["title"] == "Test Task"

    def test_get_task_not_found(self, client, db, auth_headers):
        response = client.get("/api/tasks/999", headers=auth_headers)
        assert response.status_code == 404
        assert response.get_json()["error"] == "Task not found"

    def test_other_users_task_looks_missing(self, client, db, auth_headers, other_headers):
        task_id = _create_task(client, auth_headers).get_json()["id"]

        foreign = client.get(f"/api/tasks/{task_id}", headers=other_headers)
        missing = client.get("/api/tasks/999", headers=other_headers)

        assert foreign.status_code == missing.status_code == 404
        assert foreign.get_json()["error"] == missing.get_json()["error"]


class TestUpdateTask:
    def test_update_title(self, client, db, auth_headers):
        task_id = _create_task(client, auth_headers).get_json()["id"]

        response = client.put(
            f"/api/tasks/{task_id}",
            json={"title": "Updated Title"},
            headers=auth_headers,
        )
        assert response.status_code == 200
        data = response.get_json()
        assert data["message"] == "Task updated successfully"
        assert data["task"]["title"] == "Updated Title"
        assert data["task"]["description"] == "Desc"

    def test_toggle_completed(self, client, db, auth_headers):
        created = _create_task(client, auth_headers).get_json()

        client.put(f"/api/tasks/{created['id']}", json={"completed": True}, headers=auth_headers)

        task = client.get(f"/api/tasks/{created['id']}", headers=auth_headers).get_json()
        assert task["completed"] is True
        assert task["title"] == created["title"]
        assert task["created_at"] == created["created_at"]

    def test_empty_patch(self, client, db, auth_headers):
        task_id = _create_task(client, auth_headers).get_json()["id"]

        response = client.put(f"/api/tasks/{task_id}", json={}, headers=auth_headers)
        assert response.status_code == 400
        assert response.get_json()["error"] == "No fields to update"

    def test_empty_title(self, client, db, auth_headers):
        task_id = _create_task(client, auth_headers).get_json()["id"]

        response = client.put(f"/api/tasks/{task_id}", json={"title": ""}, headers=auth_headers)
        assert response.status_code == 400
        assert response.get_json()["error"] == "Title cannot be empty"

    @pytest.mark.parametrize("value", ["yes", 1, "true", None])
    def test_completed_must_be_json_boolean(self, client, db, auth_headers, value):
        task_id = _create_task(client, auth_headers).get_json()["id"]

        response = client.put(
            f"/api/tasks/{task_id}", json={"completed": value}, headers=auth_headers
        )
        assert response.status_code == 400
        assert "completed" in response.get_json()["details"]

        task = client.get(f"/api/tasks/{task_id}", headers=auth_headers).get_json()
        assert task["completed"] is False

    def test_null_description_clears_it(self, client, db, auth_headers):
        task_id = _create_task(client, auth_headers).get_json()["id"]

        response = client.put(
            f"/api/tasks/{task_id}", json={"description": None}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.get_json()["task"]["description"] == ""

    def test_update_not_found(self, client, db, auth_headers):
        response = client.put("/api/tasks/999", json={"title": "x"}, headers=auth_headers)
        assert response.status_code == 404

    def test_update_other_users_task(self, client, db, auth_headers, other_headers):
        task_id = _create_task(client, auth_headers).get_json()["id"]

        response = client.put(
            f"/api/tasks/{task_id}",
            json={"title": "Hijacked"},
            headers=other_headers,
        )
        assert response.status_code == 404

        task = client.get(f"/api/tasks/{task_id}", headers=auth_headers).get_json()
        assert task["title"] == "Test Task"


class TestDeleteTask:
    def test_delete_own_task(self, client, db, auth_headers):
        task_id = _create_task(client, auth_headers).get_json()["id"]

        response = client.delete(f"/api/tasks/{task_id}", headers=auth_headers)
        assert response.status_code == 200
        assert response.get_json()["message"] == "Task deleted successfully"

        assert client.get(f"/api/tasks/{task_id}", headers=auth_headers).status_code == 404

    def test_delete_not_found(self, client, db, auth_headers):
        response = client.delete("/api/tasks/999", headers=auth_headers)
        assert response.status_code == 404

    def test_delete_other_users_task(self, client, db, auth_headers, other_headers):
        task_id = _create_task(client, auth_headers).get_json()["id"]

        response = client.delete(f"/api/tasks/{task_id}", headers=other_headers)
        assert response.status_code == 404
        assert client.get(f"/api/tasks/{task_id}", headers=auth_headers).status_code == 200


class TestMemoryBackend:
    def test_crud_round_trip(self, memory_app):
        from task_tracker.services.identity import generate_token

        with memory_app.app_context():
            headers = {"Authorization": f"Bearer {generate_token('user-carol')}"}
        client = memory_app.test_client()

        created = client.post("/api/tasks", json={"title": "In memory"}, headers=headers)
        assert created.status_code == 201
        task_id = created.get_json()["id"]

        client.put(f"/api/tasks/{task_id}", json={"completed": True}, headers=headers)
        assert client.get(f"/api/tasks/{task_id}", headers=headers).get_json()["completed"] is True

        assert client.delete(f"/api/tasks/{task_id}", headers=headers).status_code == 200
        assert client.get("/api/tasks", headers=headers).get_json() == []
