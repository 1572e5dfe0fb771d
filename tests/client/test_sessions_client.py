"""Unit tests for the SessionsClient and AsyncSessionsClient.

This module tests the session sub-client that creates, inspects and deletes
sessions and runs commands and completions inside them.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from client._sessions import (
    AsyncSessionsClient,
    CommandResult,
    CompletionResponse,
    DeleteSessionResponse,
    FilesystemExportResponse,
    HistoryResponse,
    SessionListResponse,
    SessionsClient,
)
from client.models import SessionInfoResponse


def session_payload(session_id: str = "abc", **overrides) -> dict:
    payload = {
        "session_id": session_id,
        "current_directory": "/home/user",
        "created_at": "2025-01-15T10:00:00+00:00",
        "command_count": 0,
        "environment": {"HOME": "/home/user", "USER": "user"},
        "filesystem_summary": "12 directories, 6 files",
    }
    payload.update(overrides)
    return payload


# =============================================================================
# Response Model Tests
# =============================================================================


class TestCommandResult:
    """Tests for the CommandResult model."""

    def test_reads_wire_name(self):
        result = CommandResult(**{"output": "hi", "newDirectory": "/tmp"})
        assert result.new_directory == "/tmp"

    def test_populate_by_field_name(self):
        result = CommandResult(output="", new_directory="/")
        assert result.new_directory == "/"


class TestCompletionResponse:
    def test_defaults(self):
        response = CompletionResponse()
        assert response.suggestions == []
        assert response.replace == ""


# =============================================================================
# SessionsClient Tests
# =============================================================================


class TestSessionsClientCreate:
    """Tests for SessionsClient.create()."""

    def test_create_with_defaults(self):
        mock_http = MagicMock()
        mock_http.post.return_value = session_payload()

        client = SessionsClient(mock_http)
        result = client.create()

        mock_http.post.assert_called_once_with("/sessions", json={})
        assert isinstance(result, SessionInfoResponse)
        assert result.session_id == "abc"

    def test_create_with_seed_and_environment(self):
        mock_http = MagicMock()
        mock_http.post.return_value = session_payload(environment={"TEAM": "blue"})
        seed = {"type": "directory", "children": {}}

        client = SessionsClient(mock_http)
        client.create(seed=seed, environment={"TEAM": "blue"})

        mock_http.post.assert_called_once_with(
            "/sessions",
            json={"seed": seed, "environment": {"TEAM": "blue"}},
        )


class TestSessionsClientRead:
    """Tests for list(), get(), history() and export_filesystem()."""

    def test_list(self):
        mock_http = MagicMock()
        mock_http.get.return_value = {
            "sessions": [session_payload("a"), session_payload("b")],
            "count": 2,
        }

        result = SessionsClient(mock_http).list()

        mock_http.get.assert_called_once_with("/sessions")
        assert isinstance(result, SessionListResponse)
        assert [s.session_id for s in result.sessions] == ["a", "b"]

    def test_get(self):
        mock_http = MagicMock()
        mock_http.get.return_value = session_payload(command_count=4)

        result = SessionsClient(mock_http).get("abc")

        mock_http.get.assert_called_once_with("/sessions/abc")
        assert result.command_count == 4

    def test_history(self):
        mock_http = MagicMock()
        mock_http.get.return_value = {"session_id": "abc", "commands": ["pwd", "ls"]}

        result = SessionsClient(mock_http).history("abc")

        mock_http.get.assert_called_once_with("/sessions/abc/history")
        assert isinstance(result, HistoryResponse)
        assert result.commands == ["pwd", "ls"]

    def test_export_filesystem(self):
        mock_http = MagicMock()
        mock_http.get.return_value = {
            "session_id": "abc",
            "filesystem": {"type": "directory", "children": {}},
            "summary": "0 directories, 0 files",
        }

        result = SessionsClient(mock_http).export_filesystem("abc")

        mock_http.get.assert_called_once_with("/sessions/abc/filesystem")
        assert isinstance(result, FilesystemExportResponse)
        assert result.filesystem["type"] == "directory"


class TestSessionsClientCommands:
    """Tests for execute(), complete(), delete() and reset()."""

    def test_execute(self):
        mock_http = MagicMock()
        mock_http.post.return_value = {"output": "", "newDirectory": "/home/user/documents"}

        result = SessionsClient(mock_http).execute("abc", "cd documents")

        mock_http.post.assert_called_once_with(
            "/sessions/abc/execute", json={"command": "cd documents"}
        )
        assert isinstance(result, CommandResult)
        assert result.new_directory == "/home/user/documents"

    def test_complete(self):
        mock_http = MagicMock()
        mock_http.post.return_value = {"suggestions": ["documents/"], "replace": "d"}

        result = SessionsClient(mock_http).complete("abc", "cd d")

        mock_http.post.assert_called_once_with("/sessions/abc/complete", json={"line": "cd d"})
        assert result.suggestions == ["documents/"]

    def test_delete(self):
        mock_http = MagicMock()
        mock_http.delete.return_value = {"session_id": "abc", "deleted": True}

        result = SessionsClient(mock_http).delete("abc")

        mock_http.delete.assert_called_once_with("/sessions/abc")
        assert isinstance(result, DeleteSessionResponse)
        assert result.deleted is True

    def test_reset(self):
        mock_http = MagicMock()
        mock_http.post.return_value = session_payload()

        result = SessionsClient(mock_http).reset("abc")

        mock_http.post.assert_called_once_with("/sessions/abc/reset", json=None)
        assert result.command_count == 0


# =============================================================================
# AsyncSessionsClient Tests
# =============================================================================


class TestAsyncSessionsClient:
    """Tests for AsyncSessionsClient."""

    async def test_create(self):
        mock_http = AsyncMock()
        mock_http.post.return_value = session_payload()

        result = await AsyncSessionsClient(mock_http).create(environment={"A": "1"})

        mock_http.post.assert_called_once_with("/sessions", json={"environment": {"A": "1"}})
        assert result.session_id == "abc"

    async def test_execute(self):
        mock_http = AsyncMock()
        mock_http.post.return_value = {"output": "/home/user", "newDirectory": "/home/user"}

        result = await AsyncSessionsClient(mock_http).execute("abc", "pwd")

        mock_http.post.assert_called_once_with("/sessions/abc/execute", json={"command": "pwd"})
        assert result.output == "/home/user"

    async def test_list_and_delete(self):
        mock_http = AsyncMock()
        mock_http.get.return_value = {"sessions": [], "count": 0}
        mock_http.delete.return_value = {"session_id": "abc", "deleted": True}

        client = AsyncSessionsClient(mock_http)
        assert (await client.list()).count == 0
        assert (await client.delete("abc")).deleted is True

        mock_http.get.assert_called_once_with("/sessions")
        mock_http.delete.assert_called_once_with("/sessions/abc")

    @pytest.mark.parametrize(
        "method, path",
        [("history", "/sessions/abc/history"), ("get", "/sessions/abc")],
    )
    async def test_get_paths(self, method, path):
        mock_http = AsyncMock()
        mock_http.get.return_value = (
            {"session_id": "abc", "commands": []} if method == "history" else session_payload()
        )

        await getattr(AsyncSessionsClient(mock_http), method)("abc")

        mock_http.get.assert_called_once_with(path)

    async def test_reset(self):
        mock_http = AsyncMock()
        mock_http.post.return_value = session_payload()

        await AsyncSessionsClient(mock_http).reset("abc")

        mock_http.post.assert_called_once_with("/sessions/abc/reset", json=None)
