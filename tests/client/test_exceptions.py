"""Unit tests for the vshell client exception hierarchy.

The hierarchy being tested:
    VShellClientError (base)
    ├── ConnectionError
    ├── TimeoutError
    └── APIError
        ├── ValidationError (HTTP 422)
        ├── NotFoundError (HTTP 404)
        ├── ConflictError (HTTP 409)
        └── ServerError (HTTP 5xx)
"""

import pytest

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


class TestHierarchy:
    @pytest.mark.parametrize(
        "error_class", [ConnectionError, TimeoutError, APIError, NotFoundError, ServerError]
    )
    def test_everything_is_a_client_error(self, error_class) -> None:
        assert issubclass(error_class, VShellClientError)

    @pytest.mark.parametrize(
        "error_class", [ValidationError, NotFoundError, ConflictError, ServerError]
    )
    def test_status_errors_are_api_errors(self, error_class) -> None:
        assert issubclass(error_class, APIError)

    def test_builtins_are_not_shadowed_for_catching(self) -> None:
        """The client's ConnectionError is not the builtin one."""
        assert not issubclass(ConnectionError, OSError)


class TestVShellClientError:
    def test_message(self) -> None:
        error = VShellClientError("Something went wrong")
        assert error.message == "Something went wrong"
        assert str(error) == "Something went wrong"


class TestConnectionError:
    def test_with_url_and_cause(self) -> None:
        cause = OSError("refused")
        error = ConnectionError("Failed to connect", url="http://x", cause=cause)
        assert error.cause is cause
        assert str(error) == "Failed to connect (url: http://x)"

    def test_without_url(self) -> None:
        assert str(ConnectionError("Failed")) == "Failed"


class TestTimeoutError:
    def test_str_lists_timeout_and_url(self) -> None:
        error = TimeoutError("Timed out", timeout=5.0, url="http://x/health")
        assert str(error) == "Timed out (timeout: 5.0s, url: http://x/health)"

    def test_plain_message(self) -> None:
        assert str(TimeoutError("Timed out")) == "Timed out"


class TestAPIError:
    def test_default_status_codes(self) -> None:
        assert APIError("x").status_code == 400
        assert ValidationError("x").status_code == 422
        assert NotFoundError("x").status_code == 404
        assert ConflictError("x").status_code == 409
        assert ServerError("x").status_code == 500

    def test_explicit_status_code_wins(self) -> None:
        assert ServerError("x", status_code=503).status_code == 503

    def test_str_with_error_type(self) -> None:
        error = NotFoundError("The session 'a' does not exist", error_type="Session Not Found")
        assert str(error) == "[HTTP 404] [Session Not Found] The session 'a' does not exist"

    def test_str_without_error_type(self) -> None:
        assert str(ConflictError("full")) == "[HTTP 409] full"

    def test_catch_by_base_class(self) -> None:
        with pytest.raises(VShellClientError):
            raise ConflictError("Session limit of 3 reached", details={"max_sessions": 3})
