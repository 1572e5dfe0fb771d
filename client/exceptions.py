"""Exceptions raised by the vshell API client.

Exception Hierarchy:
    VShellClientError (base)
    ├── ConnectionError - the server could not be reached
    ├── TimeoutError - the request took longer than the client timeout
    └── APIError - the server answered with an error status
        ├── ValidationError (HTTP 422)
        ├── NotFoundError (HTTP 404, e.g. unknown session id)
        ├── ConflictError (HTTP 409, e.g. session limit reached)
        └── ServerError (HTTP 5xx)

A command that fails inside the shell (``cat missing.txt``) is not an error
here: its message is returned as the command output.

Example:
    Recovering from an expired session::

        try:
            client.sessions.execute(session_id, "ls")
        except NotFoundError:
            session_id = client.sessions.create().session_id
"""

from typing import Any


class VShellClientError(Exception):
    """Base exception for every error raised by the client.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ConnectionError(VShellClientError):
    """The client could not connect to the vshell server.

    Attributes:
        message: Human-readable error description.
        url: The URL that could not be reached.
        cause: The underlying httpx exception.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.url = url
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.message} (url: {self.url})" if self.url else self.message


class TimeoutError(VShellClientError):
    """The request did not complete within the client timeout.

    Attributes:
        message: Human-readable error description.
        timeout: The timeout in seconds.
        url: The URL that timed out.
    """

    def __init__(
        self,
        message: str,
        timeout: float | None = None,
        url: str | None = None,
    ) -> None:
        self.timeout = timeout
        self.url = url
        super().__init__(message)

    def __str__(self) -> str:
        extras = []
        if self.timeout is not None:
            extras.append(f"timeout: {self.timeout}s")
        if self.url:
            extras.append(f"url: {self.url}")
        if not extras:
            return self.message
        return f"{self.message} ({', '.join(extras)})"


class APIError(VShellClientError):
    """The server returned an HTTP error status.

    Attributes:
        message: The ``detail`` from the error body.
        status_code: HTTP status code.
        error_type: The ``error`` title from the body, e.g. "Session Not Found".
        details: Remaining fields of the error body.
        response_body: The decoded body, for debugging.
    """

    default_status: int = 400

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_type: str | None = None,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        self.status_code = status_code if status_code is not None else self.default_status
        self.error_type = error_type
        self.details = details
        self.response_body = response_body
        super().__init__(message)

    def __str__(self) -> str:
        if self.error_type:
            return f"[HTTP {self.status_code}] [{self.error_type}] {self.message}"
        return f"[HTTP {self.status_code}] {self.message}"


class ValidationError(APIError):
    """The request body was rejected (HTTP 422).

    ``details["errors"]`` holds the field-level errors when the server
    provides them.
    """

    default_status = 422


class NotFoundError(APIError):
    """The session does not exist (HTTP 404)."""

    default_status = 404


class ConflictError(APIError):
    """The request conflicts with server state (HTTP 409).

    Raised when the server has reached its session limit; ``details`` then
    carries ``max_sessions``.
    """

    default_status = 409


class ServerError(APIError):
    """The server failed while handling the request (HTTP 5xx)."""

    default_status = 500
