"""Integration tests for the session routes and service endpoints.

These tests verify:
- GET / and GET /health
- POST /sessions (default seed, custom seed, environment, limit, bad seed)
- GET /sessions and GET /sessions/{id}
- DELETE /sessions/{id}
- POST /sessions/{id}/execute and /complete
- GET /sessions/{id}/history and /filesystem
- POST /sessions/{id}/reset
- 404 responses for unknown sessions
"""

import pytest

from tests.fixtures.sessions import create_small_seed


@pytest.fixture
def client(client_with_manager):
    client, _ = client_with_manager
    return client


@pytest.fixture
def session_id(client) -> str:
    response = client.post("/sessions", json={})
    assert response.status_code == 201, response.json()
    return response.json()["session_id"]


def execute(client, session_id: str, command: str) -> dict:
    response = client.post(f"/sessions/{session_id}/execute", json={"command": command})
    assert response.status_code == 200, response.json()
    return response.json()


class TestServiceEndpoints:
    def test_root(self, client):
        data = client.get("/").json()
        assert data["message"] == "Welcome to the Virtual Shell Simulator API"
        assert data["version"] == "0.1.0"

    def test_health_counts_sessions(self, client, session_id):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "sessions": 1}


class TestCreateSession:
    def test_default_session(self, client):
        response = client.post("/sessions", json={})

        assert response.status_code == 201
        data = response.json()
        assert data["current_directory"] == "/home/user"
        assert data["command_count"] == 0
        assert data["environment"]["USER"] == "user"
        assert data["filesystem_summary"] == "12 directories, 6 files"
        assert "created_at" in data

    def test_custom_seed_and_environment(self, client):
        response = client.post(
            "/sessions",
            json={"seed": create_small_seed(), "environment": {"TEAM": "blue"}},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["environment"]["TEAM"] == "blue"
        assert data["filesystem_summary"] == "4 directories, 4 files"

    def test_seed_with_file_root_is_rejected(self, client):
        response = client.post("/sessions", json={"seed": {"type": "file", "content": ""}})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid Value"

    @pytest.mark.parametrize("root", ["x", 5])
    def test_wrapped_root_that_is_not_a_tree_is_rejected(self, client, root):
        response = client.post("/sessions", json={"seed": {"/": root}})

        assert response.status_code == 400
        assert response.json()["detail"] == "Seed root must be a directory"

    def test_malformed_seed_is_rejected(self, client):
        response = client.post(
            "/sessions",
            json={"seed": {"type": "directory", "children": {"a": {"type": "socket"}}}},
        )

        assert response.status_code in (400, 422)

    def test_session_limit(self, client):
        for _ in range(3):
            assert client.post("/sessions", json={}).status_code == 201

        response = client.post("/sessions", json={})

        assert response.status_code == 409
        data = response.json()
        assert data["error"] == "Session Limit Reached"
        assert data["max_sessions"] == 3


class TestReadSessions:
    def test_list(self, client, session_id):
        data = client.get("/sessions").json()
        assert data["count"] == 1
        assert data["sessions"][0]["session_id"] == session_id

    def test_get(self, client, session_id):
        execute(client, session_id, "cd documents")

        data = client.get(f"/sessions/{session_id}").json()

        assert data["current_directory"] == "/home/user/documents"
        assert data["command_count"] == 1

    def test_unknown_session(self, client):
        response = client.get("/sessions/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {
            "error": "Session Not Found",
            "detail": "The session 'does-not-exist' does not exist",
            "session_id": "does-not-exist",
        }


class TestDeleteSession:
    def test_delete(self, client, session_id):
        response = client.delete(f"/sessions/{session_id}")

        assert response.status_code == 200
        assert response.json() == {"session_id": session_id, "deleted": True}
        assert client.get(f"/sessions/{session_id}").status_code == 404

    def test_delete_unknown(self, client):
        assert client.delete("/sessions/nope").status_code == 404


class TestExecute:
    def test_cd_and_cat(self, client, session_id):
        data = execute(client, session_id, "cd documents")
        assert data == {"output": "", "newDirectory": "/home/user/documents"}

        data = execute(client, session_id, "cat readme.txt")
        assert data["output"].startswith("Welcome to the Linux Mastery Game!")

    def test_shell_errors_are_output(self, client, session_id):
        data = execute(client, session_id, "rm nonexistent")
        assert data == {
            "output": "rm: cannot remove 'nonexistent': No such file or directory",
            "newDirectory": "/home/user",
        }

    def test_unknown_command_is_output(self, client, session_id):
        assert execute(client, session_id, "frob")["output"] == "bash: frob: command not found"

    def test_missing_command_field(self, client, session_id):
        response = client.post(f"/sessions/{session_id}/execute", json={})
        assert response.status_code == 422

    def test_unknown_session(self, client):
        response = client.post("/sessions/nope/execute", json={"command": "pwd"})
        assert response.status_code == 404

    def test_sessions_are_isolated(self, client):
        first = client.post("/sessions", json={}).json()["session_id"]
        second = client.post("/sessions", json={}).json()["session_id"]

        execute(client, first, "export FOO=bar")

        assert execute(client, first, "echo $FOO")["output"] == "bar"
        assert execute(client, second, "echo $FOO")["output"] == ""


class TestComplete:
    def test_complete_command(self, client, session_id):
        response = client.post(f"/sessions/{session_id}/complete", json={"line": "wh"})

        assert response.status_code == 200
        assert response.json() == {"suggestions": ["which", "whoami"], "replace": "wh"}

    def test_complete_path(self, client, session_id):
        response = client.post(f"/sessions/{session_id}/complete", json={"line": "cd pro"})
        assert response.json()["suggestions"] == ["projects/"]


class TestHistoryAndFilesystem:
    def test_history(self, client, session_id):
        execute(client, session_id, "pwd")
        execute(client, session_id, "ls -a")

        data = client.get(f"/sessions/{session_id}/history").json()

        assert data == {"session_id": session_id, "commands": ["pwd", "ls -a"]}

    def test_filesystem_export_can_seed_a_new_session(self, client, session_id):
        execute(client, session_id, "mkdir exported")

        exported = client.get(f"/sessions/{session_id}/filesystem").json()
        assert exported["summary"] == "13 directories, 6 files"

        clone = client.post("/sessions", json={"seed": exported["filesystem"]}).json()
        assert execute(client, clone["session_id"], "ls -l exported")["output"] == ""
        assert clone["filesystem_summary"] == exported["summary"]


class TestReset:
    def test_reset(self, client, session_id):
        execute(client, session_id, "rm -r documents")
        execute(client, session_id, "cd /")

        response = client.post(f"/sessions/{session_id}/reset")

        assert response.status_code == 200
        data = response.json()
        assert data["session_id"] == session_id
        assert data["current_directory"] == "/home/user"
        assert data["command_count"] == 0
        assert "documents" in execute(client, session_id, "ls")["output"]

    def test_reset_unknown(self, client):
        assert client.post("/sessions/nope/reset").status_code == 404
