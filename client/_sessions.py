"""Session sub-client for the vshell API.

This module provides SessionsClient and AsyncSessionsClient for the session
endpoints (/sessions/*).

This is an internal module. Import from `client` instead.
"""

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from api.models import SessionInfoResponse
from client._base import AsyncBaseClient, BaseClient

if TYPE_CHECKING:
    from client._http import AsyncHTTPClient, HTTPClient


# Response models for session endpoints


class SessionListResponse(BaseModel):
    sessions: list[SessionInfoResponse]
    count: int


class DeleteSessionResponse(BaseModel):
    session_id: str
    deleted: bool


class CommandResult(BaseModel):
    """Result of running one input line.

    Attributes:
        output: Text output of the command, possibly with ANSI styling.
        new_directory: Working directory after the command ran
            (``newDirectory`` on the wire).
    """

    output: str
    new_directory: str = Field(alias="newDirectory")

    class Config:
        populate_by_name = True


class CompletionResponse(BaseModel):
    suggestions: list[str] = Field(default_factory=list)
    replace: str = ""


class HistoryResponse(BaseModel):
    """Command history of a session, oldest first.

    Attributes:
        session_id: The session the history belongs to.
        commands: Input lines in execution order.
    """

    session_id: str
    commands: list[str]


class FilesystemExportResponse(BaseModel):
    """Export of a session's filesystem.

    Attributes:
        session_id: The exported session.
        filesystem: The tree in seed format; pass it as ``seed`` to
            ``create`` to clone the session's files.
        summary: Directory and file counts.
    """

    session_id: str
    filesystem: dict[str, Any]
    summary: str


def _create_body(
    seed: dict[str, Any] | None, environment: dict[str, str] | None
) -> dict[str, Any]:
    body: dict[str, Any] = {}
    if seed is not None:
        body["seed"] = seed
    if environment is not None:
        body["environment"] = environment
    return body


# Synchronous SessionsClient


class SessionsClient(BaseClient):
    """Synchronous client for session endpoints (/sessions/*).

    Example:
        with VShellClient() as client:
            session = client.sessions.create()
            result = client.sessions.execute(session.session_id, "cd documents")
            print(result.new_directory)  # /home/user/documents
            print(client.sessions.execute(session.session_id, "cat readme.txt").output)
            client.sessions.delete(session.session_id)
    """

    _BASE_PATH = "/sessions"

    def create(
        self,
        seed: dict[str, Any] | None = None,
        environment: dict[str, str] | None = None,
    ) -> SessionInfoResponse:
        """Create a new session.

        Args:
            seed: Seed filesystem (the service default tree when omitted).
            environment: Extra shell variables.

        Returns:
            Snapshot of the new session.

        Raises:
            ConflictError: If the service has reached its session limit.
            APIError: If the seed is rejected.
        """
        data = self._post(self._path(), json=_create_body(seed, environment))
        return SessionInfoResponse(**data)

    def list(self) -> SessionListResponse:
        return SessionListResponse(**self._get(self._path()))

    def get(self, session_id: str) -> SessionInfoResponse:
        """Get a snapshot of one session.

        Raises:
            NotFoundError: If the session does not exist.
        """
        return SessionInfoResponse(**self._get(self._path(session_id)))

    def delete(self, session_id: str) -> DeleteSessionResponse:
        return DeleteSessionResponse(**self._delete(self._path(session_id)))

    def execute(self, session_id: str, command: str) -> CommandResult:
        """Run one input line in a session.

        Shell failures such as a missing file come back as ``output`` text,
        not as exceptions.

        Args:
            session_id: The target session.
            command: The input line, e.g. "ls -la".

        Returns:
            The output and the working directory afterwards.

        Raises:
            NotFoundError: If the session does not exist.
        """
        data = self._post(self._path(session_id, "execute"), json={"command": command})
        return CommandResult(**data)

    def complete(self, session_id: str, line: str) -> CompletionResponse:
        """Get completion suggestions for the last token of ``line``."""
        data = self._post(self._path(session_id, "complete"), json={"line": line})
        return CompletionResponse(**data)

    def history(self, session_id: str) -> HistoryResponse:
        return HistoryResponse(**self._get(self._path(session_id, "history")))

    def export_filesystem(self, session_id: str) -> FilesystemExportResponse:
        data = self._get(self._path(session_id, "filesystem"))
        return FilesystemExportResponse(**data)

    def reset(self, session_id: str) -> SessionInfoResponse:
        """Rebuild a session from its original seed, keeping its id."""
        return SessionInfoResponse(**self._post(self._path(session_id, "reset")))


# Asynchronous SessionsClient


class AsyncSessionsClient(AsyncBaseClient):
    """Asynchronous client for session endpoints (/sessions/*).

    Example:
        async with AsyncVShellClient() as client:
            session = await client.sessions.create()
            result = await client.sessions.execute(session.session_id, "pwd")
    """

    _BASE_PATH = "/sessions"

    async def create(
        self,
        seed: dict[str, Any] | None = None,
        environment: dict[str, str] | None = None,
    ) -> SessionInfoResponse:
        """Create a new session.

        Raises:
            ConflictError: If the service has reached its session limit.
        """
        data = await self._post(self._path(), json=_create_body(seed, environment))
        return SessionInfoResponse(**data)

    async def list(self) -> SessionListResponse:
        return SessionListResponse(**await self._get(self._path()))

    async def get(self, session_id: str) -> SessionInfoResponse:
        return SessionInfoResponse(**await self._get(self._path(session_id)))

    async def delete(self, session_id: str) -> DeleteSessionResponse:
        return DeleteSessionResponse(**await self._delete(self._path(session_id)))

    async def execute(self, session_id: str, command: str) -> CommandResult:
        """Run one input line in a session.

        Raises:
            NotFoundError: If the session does not exist.
        """
        data = await self._post(
            self._path(session_id, "execute"), json={"command": command}
        )
        return CommandResult(**data)

    async def complete(self, session_id: str, line: str) -> CompletionResponse:
        data = await self._post(self._path(session_id, "complete"), json={"line": line})
        return CompletionResponse(**data)

    async def history(self, session_id: str) -> HistoryResponse:
        return HistoryResponse(**await self._get(self._path(session_id, "history")))

    async def export_filesystem(self, session_id: str) -> FilesystemExportResponse:
        data = await self._get(self._path(session_id, "filesystem"))
        return FilesystemExportResponse(**data)

    async def reset(self, session_id: str) -> SessionInfoResponse:
        return SessionInfoResponse(**await self._post(self._path(session_id, "reset")))
