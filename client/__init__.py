"""vshell API Client Library.

This module provides a typed Python client for the vshell (Virtual Shell
Simulator) REST API, with synchronous and asynchronous variants.

Example:
    Synchronous usage::

        from client import VShellClient

        with VShellClient(base_url="http://localhost:8000") as client:
            session = client.sessions.create()
            result = client.sessions.execute(session.session_id, "ls -a")
            print(result.output)

    Asynchronous usage::

        from client import AsyncVShellClient

        async with AsyncVShellClient() as client:
            session = await client.sessions.create()
            await client.sessions.execute(session.session_id, "cd /etc")

Exports:
    VShellClient: Synchronous client for the vshell REST API.
    AsyncVShellClient: Asynchronous client for the vshell REST API.

    Exceptions:
        VShellClientError: Base exception for all client errors.
        ConnectionError: Failed to connect to the server.
        TimeoutError: Request timed out.
        APIError: Server returned an error response.
        ValidationError: Request validation failed (HTTP 422).
        NotFoundError: Session not found (HTTP 404).
        ConflictError: Session limit reached (HTTP 409).
        ServerError: Server-side error (HTTP 5xx).
"""

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
from client.exceptions import (
    APIError,
    ConflictError,
    ConnectionError,
    NotFoundError,
    ServerError,
    TimeoutError,
    ValidationError,
    VShellClientError,
)
from client.models import HealthResponse, ServiceInfoResponse, SessionInfoResponse
from client.client import AsyncVShellClient, VShellClient

__all__ = [
    # Main clients
    "VShellClient",
    "AsyncVShellClient",
    # Sub-clients
    "SessionsClient",
    "AsyncSessionsClient",
    # Exceptions
    "VShellClientError",
    "ConnectionError",
    "TimeoutError",
    "APIError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "ServerError",
    # Response models
    "SessionInfoResponse",
    "SessionListResponse",
    "DeleteSessionResponse",
    "CommandResult",
    "CompletionResponse",
    "HistoryResponse",
    "FilesystemExportResponse",
    "HealthResponse",
    "ServiceInfoResponse",
]
