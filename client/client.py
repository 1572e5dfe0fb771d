"""Main vshell client classes.

This module provides the entry points for the vshell API:
- VShellClient: Synchronous client
- AsyncVShellClient: Asynchronous client

Both expose the session endpoints through ``client.sessions`` and the service
endpoints (``/`` and ``/health``) as methods.

Example:
    Synchronous usage::

        from client import VShellClient

        with VShellClient(base_url="http://localhost:8000") as client:
            session = client.sessions.create()
            client.sessions.execute(session.session_id, "mkdir notes")
            print(client.sessions.execute(session.session_id, "ls").output)

    Asynchronous usage::

        from client import AsyncVShellClient

        async with AsyncVShellClient() as client:
            session = await client.sessions.create()
            await client.sessions.execute(session.session_id, "pwd")
"""

from typing import Any

from client._http import AsyncHTTPClient, HTTPClient
from client._sessions import AsyncSessionsClient, SessionsClient
from client.exceptions import VShellClientError
from client.models import HealthResponse, ServiceInfoResponse


class VShellClient:
    """Synchronous client for the vshell REST API.

    Attributes:
        base_url: The base URL of the vshell server.
        timeout: Request timeout in seconds.
        retry_enabled: Whether automatic retry is enabled.
        max_retries: Maximum number of retry attempts.

    Example:
        Manual lifecycle management::

            client = VShellClient()
            try:
                session = client.sessions.create(environment={"EDITOR": "vim"})
            finally:
                client.close()
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: Any = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: The base URL of the vshell server.
            timeout: Request timeout in seconds.
            retry_enabled: Retry connection errors, timeouts and HTTP
                502/503/504 with exponential backoff.
            max_retries: Maximum number of retries when retry is enabled.
            transport: Custom httpx transport (e.g. MockTransport in tests).
        """
        self._http = HTTPClient(
            base_url=base_url,
            timeout=timeout,
            retry_enabled=retry_enabled,
            max_retries=max_retries,
            transport=transport,
        )
        self._sessions: SessionsClient | None = None

    def __enter__(self) -> "VShellClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the client and release its connections."""
        self._http.close()

    @property
    def sessions(self) -> SessionsClient:
        """Access session endpoints (/sessions/*).

        Returns:
            SessionsClient for creating sessions and running commands.
        """
        if self._sessions is None:
            self._sessions = SessionsClient(self._http)
        return self._sessions

    @property
    def base_url(self) -> str:
        return self._http.base_url

    @property
    def timeout(self) -> float:
        return self._http.timeout

    @property
    def retry_enabled(self) -> bool:
        return self._http.retry_enabled

    @property
    def max_retries(self) -> int:
        return self._http.max_retries

    def info(self) -> ServiceInfoResponse:
        return ServiceInfoResponse(**self._http.get("/"))

    def health(self) -> HealthResponse:
        """Check service health.

        Returns:
            The service status and number of live sessions.
        """
        return HealthResponse(**self._http.get("/health"))

    def is_healthy(self) -> bool:
        """Return True if the service answers its health check."""
        try:
            return self.health().status == "healthy"
        except VShellClientError:
            return False

    def __repr__(self) -> str:
        return f"VShellClient(base_url={self.base_url!r})"


class AsyncVShellClient:
    """Asynchronous client for the vshell REST API.

    Mirrors VShellClient; every request method is a coroutine.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: Any = None,
    ) -> None:
        self._http = AsyncHTTPClient(
            base_url=base_url,
            timeout=timeout,
            retry_enabled=retry_enabled,
            max_retries=max_retries,
            transport=transport,
        )
        self._sessions: AsyncSessionsClient | None = None

    async def __aenter__(self) -> "AsyncVShellClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._http.close()

    @property
    def sessions(self) -> AsyncSessionsClient:
        """Access session endpoints (/sessions/*)."""
        if self._sessions is None:
            self._sessions = AsyncSessionsClient(self._http)
        return self._sessions

    @property
    def base_url(self) -> str:
        return self._http.base_url

    @property
    def timeout(self) -> float:
        return self._http.timeout

    @property
    def retry_enabled(self) -> bool:
        return self._http.retry_enabled

    @property
    def max_retries(self) -> int:
        return self._http.max_retries

    async def info(self) -> ServiceInfoResponse:
        return ServiceInfoResponse(**await self._http.get("/"))

    async def health(self) -> HealthResponse:
        return HealthResponse(**await self._http.get("/health"))

    async def is_healthy(self) -> bool:
        try:
            return (await self.health()).status == "healthy"
        except VShellClientError:
            return False

    def __repr__(self) -> str:
        return f"AsyncVShellClient(base_url={self.base_url!r})"
