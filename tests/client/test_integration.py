"""Integration tests for the vshell client library.

These tests run the clients against the real FastAPI app: the sync client
through a transport that forwards to Starlette's TestClient, and the async
client through httpx's ASGITransport. Each test gets its own SessionManager
through a dependency override.
"""

import httpx
import pytest
from httpx import ASGITransport
from starlette.testclient import TestClient

from api.dependencies import get_session_manager
from client import (
    AsyncVShellClient,
    ConflictError,
    NotFoundError,
    ValidationError,
    VShellClient,
)
from main import app
from tests.fixtures.sessions import create_small_seed


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def override_manager(fresh_manager):
    """Route every request in this module to a fresh SessionManager."""
    app.dependency_overrides[get_session_manager] = lambda: fresh_manager
    yield fresh_manager
    app.dependency_overrides.clear()


class SyncTestTransport(httpx.BaseTransport):
    """Forward httpx requests to the app through Starlette's TestClient."""

    def __init__(self, test_client: TestClient) -> None:
        self._test_client = test_client

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        response = self._test_client.request(
            method=request.method,
            url=request.url.path,
            content=request.read(),
            headers=dict(request.headers),
        )
        return httpx.Response(
            status_code=response.status_code,
            headers=response.headers,
            content=response.content,
        )


@pytest.fixture
def sync_client():
    transport = SyncTestTransport(TestClient(app, raise_server_exceptions=False))
    with VShellClient(base_url="http://test", transport=transport) as client:
        yield client


@pytest.fixture
async def async_client():
    transport = ASGITransport(app=app)
    async with AsyncVShellClient(base_url="http://test", transport=transport) as client:
        yield client


# =============================================================================
# Synchronous Client
# =============================================================================


class TestServiceIntegration:
    def test_info(self, sync_client):
        info = sync_client.info()
        assert info.version == "0.1.0"
        assert info.docs_url == "/docs"

    def test_health(self, sync_client):
        sync_client.sessions.create()
        health = sync_client.health()
        assert health.status == "healthy"
        assert health.sessions == 1
        assert sync_client.is_healthy() is True


class TestSessionIntegration:
    """End-to-end session workflows through the sync client."""

    def test_shell_workflow(self, sync_client):
        session_id = sync_client.sessions.create().session_id
        sessions = sync_client.sessions

        assert sessions.execute(session_id, "mkdir notes").output == ""
        result = sessions.execute(session_id, "cd notes")
        assert result.new_directory == "/home/user/notes"
        sessions.execute(session_id, "touch todo.txt")
        assert sessions.execute(session_id, "ls").output == "todo.txt"

        history = sessions.history(session_id)
        assert history.commands == ["mkdir notes", "cd notes", "touch todo.txt", "ls"]

        info = sessions.get(session_id)
        assert info.current_directory == "/home/user/notes"
        assert info.command_count == 4

    def test_shell_failures_are_output(self, sync_client):
        session_id = sync_client.sessions.create().session_id
        result = sync_client.sessions.execute(session_id, "cat missing.txt")
        assert result.output == "cat: missing.txt: No such file or directory"

    def test_completion(self, sync_client):
        session_id = sync_client.sessions.create().session_id
        completion = sync_client.sessions.complete(session_id, "cat documents/n")
        assert completion.suggestions == ["documents/notes.txt"]
        assert completion.replace == "documents/n"

    def test_clone_through_export(self, sync_client):
        sessions = sync_client.sessions
        original = sessions.create(seed=create_small_seed()).session_id
        sessions.execute(original, "touch marker")

        exported = sessions.export_filesystem(original)
        clone = sessions.create(seed=exported.filesystem)

        assert clone.filesystem_summary == exported.summary
        assert sessions.execute(clone.session_id, "cat /home/user/marker").output == ""

    def test_reset(self, sync_client):
        sessions = sync_client.sessions
        session_id = sessions.create(environment={"TEAM": "blue"}).session_id
        sessions.execute(session_id, "rm -r documents")

        info = sessions.reset(session_id)

        assert info.session_id == session_id
        assert info.environment["TEAM"] == "blue"
        assert "readme.txt" in sessions.execute(session_id, "ls documents").output

    def test_delete_then_not_found(self, sync_client):
        session_id = sync_client.sessions.create().session_id
        assert sync_client.sessions.delete(session_id).deleted is True

        with pytest.raises(NotFoundError) as exc_info:
            sync_client.sessions.execute(session_id, "pwd")

        assert exc_info.value.error_type == "Session Not Found"
        assert exc_info.value.details == {"session_id": session_id}

    def test_session_limit(self, sync_client):
        for _ in range(3):
            sync_client.sessions.create()

        with pytest.raises(ConflictError) as exc_info:
            sync_client.sessions.create()

        assert exc_info.value.details["max_sessions"] == 3
        assert sync_client.sessions.list().count == 3

    def test_invalid_request(self, sync_client):
        session_id = sync_client.sessions.create().session_id
        with pytest.raises(ValidationError):
            sync_client._http.post(f"/sessions/{session_id}/execute", json={})


# =============================================================================
# Asynchronous Client
# =============================================================================


class TestAsyncIntegration:
    """End-to-end checks through the async client."""

    async def test_shell_workflow(self, async_client):
        session = await async_client.sessions.create()

        result = await async_client.sessions.execute(session.session_id, "cd /etc")
        assert result.new_directory == "/etc"
        result = await async_client.sessions.execute(session.session_id, "pwd")
        assert result.output == "/etc"

    async def test_health(self, async_client):
        assert (await async_client.health()).status == "healthy"
        assert await async_client.is_healthy() is True

    async def test_not_found(self, async_client):
        with pytest.raises(NotFoundError):
            await async_client.sessions.get("missing")

    async def test_list_and_delete(self, async_client):
        first = await async_client.sessions.create()
        await async_client.sessions.create()

        await async_client.sessions.delete(first.session_id)

        listing = await async_client.sessions.list()
        assert listing.count == 1
        assert first.session_id not in [s.session_id for s in listing.sessions]
