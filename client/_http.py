"""Internal HTTP layer for the vshell client.

Turns error responses into client exceptions and retries transient failures
with exponential backoff when retry is enabled. Both the sync and async
clients share the response handling below.

This is an internal module and should not be imported directly by users.
"""

import asyncio
import logging
import time
from typing import Any, Literal

import httpx

from client.exceptions import (
    APIError,
    ConflictError,
    ConnectionError,
    NotFoundError,
    ServerError,
    TimeoutError,
    ValidationError,
)

logger = logging.getLogger(__name__)

HttpMethod = Literal["GET", "POST", "DELETE"]

# Status codes retried when retry is enabled
RETRYABLE_STATUS_CODES = {502, 503, 504}

DEFAULT_RETRY_BACKOFF_BASE = 0.5  # seconds
DEFAULT_RETRY_BACKOFF_MAX = 30.0  # seconds

_STATUS_ERRORS: dict[int, type[APIError]] = {
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
}


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def _parse_error_response(response: httpx.Response) -> tuple[str, str | None, dict | None]:
    """Extract ``(message, error_type, details)`` from an error response.

    The service answers errors with ``{"error": title, "detail": message, ...}``;
    FastAPI's own request validation answers with ``{"detail": [errors]}``.
    Anything else falls back to the raw text.
    """
    body = _decode_body(response)
    if not isinstance(body, dict):
        text = str(body).strip()
        return text or f"HTTP {response.status_code} error", None, None

    detail = body.get("detail")
    error_type = body.get("error")
    extras = {k: v for k, v in body.items() if k not in ("error", "detail")} or None

    if isinstance(detail, list):
        messages = [
            f"{err.get('loc', ['unknown'])[-1]}: {err.get('msg', 'invalid')}"
            for err in detail
            if isinstance(err, dict)
        ]
        return "; ".join(messages), "Validation Error", {"errors": detail}
    if isinstance(detail, str):
        return detail, error_type, extras
    if error_type:
        return str(error_type), error_type, extras
    return str(body), None, None


def _raise_for_status(response: httpx.Response) -> None:
    """Raise the client exception matching an error status.

    Raises:
        NotFoundError: For HTTP 404 responses.
        ConflictError: For HTTP 409 responses.
        ValidationError: For HTTP 422 responses.
        ServerError: For HTTP 5xx responses.
        APIError: For other HTTP 4xx responses.
    """
    if response.is_success:
        return

    message, error_type, details = _parse_error_response(response)
    status_code = response.status_code
    if status_code >= 500:
        error_class: type[APIError] = ServerError
    else:
        error_class = _STATUS_ERRORS.get(status_code, APIError)

    raise error_class(
        message=message,
        status_code=status_code,
        error_type=error_type,
        details=details,
        response_body=_decode_body(response),
    )


def _calculate_backoff(attempt: int, base: float = DEFAULT_RETRY_BACKOFF_BASE) -> float:
    """Return ``base * 2 ** attempt`` capped at DEFAULT_RETRY_BACKOFF_MAX."""
    return min(base * (2**attempt), DEFAULT_RETRY_BACKOFF_MAX)


def _handle_response(response: httpx.Response) -> Any:
    _raise_for_status(response)
    return response.json() if response.content else None


def _transport_error(exc: httpx.HTTPError, url: str, timeout: float) -> Exception:
    if isinstance(exc, httpx.TimeoutException):
        return TimeoutError(f"Request to {url} timed out", timeout=timeout, url=url)
    return ConnectionError(f"Failed to connect to {url}", url=url, cause=exc)


class _RetryPolicy:
    """Shared retry bookkeeping for the sync and async clients."""

    def __init__(self, base_url: str, timeout: float, retry_enabled: bool, max_retries: int):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_enabled = retry_enabled
        self.max_retries = max_retries

    @property
    def attempts(self) -> int:
        return self.max_retries + 1 if self.retry_enabled else 1

    def should_retry_status(self, response: httpx.Response, attempt: int) -> bool:
        return (
            self.retry_enabled
            and response.status_code in RETRYABLE_STATUS_CODES
            and attempt < self.attempts - 1
        )

    def is_last(self, attempt: int) -> bool:
        return not self.retry_enabled or attempt >= self.attempts - 1


class HTTPClient(_RetryPolicy):
    """Synchronous HTTP client wrapping ``httpx.Client``.

    Attributes:
        base_url: Base URL of the vshell service.
        timeout: Request timeout in seconds.
        retry_enabled: Whether to retry transient failures.
        max_retries: Maximum number of retries.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(base_url, timeout, retry_enabled, max_retries)
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def request(
        self,
        method: HttpMethod,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Args:
            method: HTTP method.
            path: Path relative to ``base_url``.
            json: JSON body to send.

        Returns:
            The decoded body, or None for empty responses.

        Raises:
            ConnectionError: If the server cannot be reached.
            TimeoutError: If the request times out.
            APIError: If the server returns an error status.
        """
        url = f"{self.base_url}{path}"
        for attempt in range(self.attempts):
            try:
                response = self._client.request(method, path, json=json)
            except (httpx.ConnectError, httpx.TimeoutException) as e:
                error = _transport_error(e, url, self.timeout)
                if self.is_last(attempt):
                    raise error from e
                logger.debug(f"{method} {url} failed ({error}); retrying")
                time.sleep(_calculate_backoff(attempt))
                continue

            if self.should_retry_status(response, attempt):
                logger.debug(f"{method} {url} returned {response.status_code}; retrying")
                time.sleep(_calculate_backoff(attempt))
                continue
            return _handle_response(response)

        raise RuntimeError("Unexpected exit from request retry loop")

    def get(self, path: str) -> Any:
        return self.request("GET", path)

    def post(self, path: str, json: dict[str, Any] | None = None) -> Any:
        return self.request("POST", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)


class AsyncHTTPClient(_RetryPolicy):
    """Asynchronous HTTP client wrapping ``httpx.AsyncClient``.

    Behaves like HTTPClient but every request method is a coroutine.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(base_url, timeout, retry_enabled, max_retries)
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def request(
        self,
        method: HttpMethod,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            ConnectionError: If the server cannot be reached.
            TimeoutError: If the request times out.
            APIError: If the server returns an error status.
        """
        url = f"{self.base_url}{path}"
        for attempt in range(self.attempts):
            try:
                response = await self._client.request(method, path, json=json)
            except (httpx.ConnectError, httpx.TimeoutException) as e:
                error = _transport_error(e, url, self.timeout)
                if self.is_last(attempt):
                    raise error from e
                logger.debug(f"{method} {url} failed ({error}); retrying")
                await asyncio.sleep(_calculate_backoff(attempt))
                continue

            if self.should_retry_status(response, attempt):
                logger.debug(f"{method} {url} returned {response.status_code}; retrying")
                await asyncio.sleep(_calculate_backoff(attempt))
                continue
            return _handle_response(response)

        raise RuntimeError("Unexpected exit from request retry loop")

    async def get(self, path: str) -> Any:
        return await self.request("GET", path)

    async def post(self, path: str, json: dict[str, Any] | None = None) -> Any:
        return await self.request("POST", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)
