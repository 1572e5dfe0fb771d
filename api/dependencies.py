"""Dependency injection providers for the FastAPI application.

This module defines dependencies that can be injected into route handlers,
providing access to the shared SessionManager.
"""

from typing import Annotated, Optional

from fastapi import Depends

from api.config import ServiceSettings
from engine.manager import SessionManager


# Global state
# A single manager hosts every session for the lifetime of the app
_session_manager: SessionManager | None = None


def get_session_manager() -> SessionManager:
    """Get the shared SessionManager instance.

    This function is a FastAPI dependency. Route handlers that declare a
    ``SessionManagerDep`` parameter receive the shared manager.

    Returns:
        The shared SessionManager instance.

    Raises:
        RuntimeError: If the manager hasn't been initialized yet.

    Example:
        @router.get("/sessions/{session_id}")
        async def get_session(session_id: str, manager: SessionManagerDep):
            return manager.get(session_id)
    """
    if _session_manager is None:
        raise RuntimeError(
            "SessionManager not initialized. Call initialize_session_manager() first."
        )

    return _session_manager


def initialize_session_manager(
    settings: Optional[ServiceSettings] = None,
) -> SessionManager:
    """Initialize the shared SessionManager instance.

    This should be called once when the FastAPI app starts up.

    Args:
        settings: Service settings (read from the environment when omitted).

    Returns:
        The newly created SessionManager instance.
    """
    global _session_manager

    settings = settings or ServiceSettings.from_env()
    _session_manager = SessionManager(
        home=settings.home,
        user=settings.user,
        path=settings.path,
        history_limit=settings.history_limit,
        max_sessions=settings.max_sessions,
    )

    return _session_manager


def shutdown_session_manager() -> int:
    """Drop every session and release the shared manager.

    Returns:
        The number of sessions that were still open.
    """
    global _session_manager

    dropped = 0
    if _session_manager is not None:
        dropped = _session_manager.clear()

    _session_manager = None
    return dropped


# Type alias for dependency injection
SessionManagerDep = Annotated[SessionManager, Depends(get_session_manager)]
