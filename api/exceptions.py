"""Exception handlers for the vshell FastAPI application.

This module converts Python exceptions into consistent JSON responses. Shell
failures never reach these handlers: they are returned as command output.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from engine.manager import SessionLimitError, SessionNotFoundError

logger = logging.getLogger(__name__)

__all__ = [
    "SessionNotFoundError",
    "SessionLimitError",
    "session_not_found_handler",
    "session_limit_handler",
    "validation_exception_handler",
    "value_error_handler",
    "runtime_error_handler",
    "generic_exception_handler",
]


async def session_not_found_handler(request: Request, exc: SessionNotFoundError):
    """Handle SessionNotFoundError exceptions.

    Args:
        request: The incoming request that triggered the error.
        exc: The SessionNotFoundError exception.

    Returns:
        JSONResponse with 404 status and the requested session id.
    """
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "Session Not Found",
            "detail": f"The session '{exc.session_id}' does not exist",
            "session_id": exc.session_id,
        },
    )


async def session_limit_handler(request: Request, exc: SessionLimitError):
    """Handle SessionLimitError exceptions.

    Returns a 409 (Conflict): the service is full until a session is deleted.
    """
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={
            "error": "Session Limit Reached",
            "detail": str(exc),
            "max_sessions": exc.max_sessions,
            "suggestion": "Delete an existing session with DELETE /sessions/{session_id}",
        },
    )


async def validation_exception_handler(request: Request, exc: ValidationError):
    """Handle Pydantic validation errors.

    These occur when data built inside a handler (for example a seed
    filesystem) doesn't match the expected model.

    Args:
        request: The incoming request that triggered the error.
        exc: The ValidationError exception.

    Returns:
        JSONResponse with validation error details.
    """
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Validation Error",
            "detail": "The request data failed validation",
            "validation_errors": exc.errors(include_url=False, include_context=False),
        },
    )


async def value_error_handler(request: Request, exc: ValueError):
    """Handle ValueError exceptions.

    ValueErrors indicate input that passed request validation but failed
    engine validation, such as a seed whose root is not a directory.
    """
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid Value",
            "detail": str(exc),
            "type": "ValueError",
        },
    )


async def runtime_error_handler(request: Request, exc: RuntimeError):
    """Handle RuntimeError exceptions.

    Args:
        request: The incoming request that triggered the error.
        exc: The RuntimeError exception.

    Returns:
        JSONResponse with error details.
    """
    logger.error(f"Runtime error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Runtime Error",
            "detail": str(exc),
            "type": "RuntimeError",
        },
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """Handle any unhandled exceptions.

    This is a catch-all handler for unexpected errors. It logs the traceback
    and keeps it out of the response.
    """
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal Server Error",
            "detail": "An unexpected error occurred",
            "type": type(exc).__name__,
        },
    )
