"""Base classes for sub-clients.

Sub-clients hold a reference to the shared HTTP client and build paths under
their own ``_BASE_PATH``.

This is an internal module and should not be imported directly by users.
"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from client._http import AsyncHTTPClient, HTTPClient


class _PathMixin:
    _BASE_PATH = ""

    def _path(self, *parts: str) -> str:
        """Join ``parts`` under ``_BASE_PATH``, e.g. ``_path(id, "execute")``."""
        return "/".join([self._BASE_PATH, *parts]) if parts else self._BASE_PATH


class BaseClient(_PathMixin):
    """Base class for synchronous sub-clients.

    Attributes:
        _http: The shared HTTP client.
    """

    def __init__(self, http_client: "HTTPClient") -> None:
        self._http = http_client

    def _get(self, path: str) -> Any:
        return self._http.get(path)

    def _post(self, path: str, json: dict[str, Any] | None = None) -> Any:
        return self._http.post(path, json=json)

    def _delete(self, path: str) -> Any:
        return self._http.delete(path)


class AsyncBaseClient(_PathMixin):
    """Base class for asynchronous sub-clients.

    Attributes:
        _http: The shared async HTTP client.
    """

    def __init__(self, http_client: "AsyncHTTPClient") -> None:
        self._http = http_client

    async def _get(self, path: str) -> Any:
        return await self._http.get(path)

    async def _post(self, path: str, json: dict[str, Any] | None = None) -> Any:
        return await self._http.post(path, json=json)

    async def _delete(self, path: str) -> Any:
        return await self._http.delete(path)
