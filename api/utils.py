"""Utility functions for API route handlers."""

from api.models import SessionInfoResponse
from engine.session import ShellSession


def session_info(session: ShellSession) -> SessionInfoResponse:
    """Build the public snapshot of a session.

    Args:
        session: The session to describe.

    Returns:
        SessionInfoResponse for the session.
    """
    return SessionInfoResponse(
        session_id=session.session_id,
        current_directory=session.current_directory,
        created_at=session.created_at,
        command_count=len(session.history),
        environment=session.environment.as_dict(),
        filesystem_summary=session.filesystem.summary,
    )
