"""Session endpoints.

These endpoints create, inspect and discard shell sessions, and run commands
and completions inside them. Shell failures come back as command output with
a 200 status; only service problems (unknown session, session limit, bad
seed) are HTTP errors.
"""

from typing import Any

from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from api.dependencies import SessionManagerDep
from api.models import CreateSessionRequest, SessionInfoResponse
from api.utils import session_info

# Create router for session endpoints
router = APIRouter(
    prefix="/sessions",
    tags=["sessions"],
)


# Request/Response Models


class SessionListResponse(BaseModel):
    """List of live sessions.

    Attributes:
        sessions: Snapshot of every session.
        count: Number of sessions.
    """

    sessions: list[SessionInfoResponse]
    count: int


class DeleteSessionResponse(BaseModel):
    session_id: str
    deleted: bool = True


class ExecuteRequest(BaseModel):
    """Request model for running a command.

    Attributes:
        command: One input line, e.g. "ls -la /home/user".
    """

    command: str = Field(description="Input line to execute")


class ExecuteResponse(BaseModel):
    """Result of running one input line.

    Attributes:
        output: Text output, possibly multi-line and with ANSI styling.
        newDirectory: Working directory after the command ran.
    """

    output: str
    newDirectory: str


class CompleteRequest(BaseModel):
    line: str = Field(description="Partial input line")


class CompleteResponse(BaseModel):
    """Completion suggestions for a partial line.

    Attributes:
        suggestions: Candidate replacements for the last token.
        replace: The token the suggestions replace.
    """

    suggestions: list[str]
    replace: str


class HistoryResponse(BaseModel):
    session_id: str
    commands: list[str]


class FilesystemResponse(BaseModel):
    """Export of a session's filesystem.

    Attributes:
        session_id: The exported session.
        filesystem: The tree in seed format, usable as a new session's seed.
        summary: Directory and file counts.
    """

    session_id: str
    filesystem: dict[str, Any]
    summary: str


# Route Handlers


@router.post(
    "",
    response_model=SessionInfoResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_session(request: CreateSessionRequest, manager: SessionManagerDep):
    """Create a new session.

    Args:
        request: Optional seed filesystem and extra environment variables.
        manager: The SessionManager instance (injected by FastAPI).

    Returns:
        Snapshot of the new session.
    """
    session = manager.create(seed=request.seed, environment=request.environment)
    return session_info(session)


@router.get("", response_model=SessionListResponse)
async def list_sessions(manager: SessionManagerDep):
    """List every live session."""
    sessions = [session_info(session) for session in manager.list()]
    return SessionListResponse(sessions=sessions, count=len(sessions))


@router.get("/{session_id}", response_model=SessionInfoResponse)
async def get_session(session_id: str, manager: SessionManagerDep):
    return session_info(manager.get(session_id))


@router.delete("/{session_id}", response_model=DeleteSessionResponse)
async def delete_session(session_id: str, manager: SessionManagerDep):
    """Discard a session and its filesystem."""
    manager.delete(session_id)
    return DeleteSessionResponse(session_id=session_id)


@router.post("/{session_id}/execute", response_model=ExecuteResponse)
async def execute_command(
    session_id: str,
    request: ExecuteRequest,
    manager: SessionManagerDep,
):
    """Run one input line in a session.

    Args:
        session_id: The target session.
        request: The input line.
        manager: The SessionManager instance (injected by FastAPI).

    Returns:
        The command output and the working directory afterwards.
    """
    result = manager.execute(session_id, request.command)
    return ExecuteResponse(output=result.output, newDirectory=result.new_directory)


@router.post("/{session_id}/complete", response_model=CompleteResponse)
async def complete_line(
    session_id: str,
    request: CompleteRequest,
    manager: SessionManagerDep,
):
    """Suggest completions for the last token of a partial line."""
    completion = manager.get(session_id).complete(request.line)
    return CompleteResponse(
        suggestions=completion.suggestions,
        replace=completion.replace,
    )


@router.get("/{session_id}/history", response_model=HistoryResponse)
async def get_history(session_id: str, manager: SessionManagerDep):
    session = manager.get(session_id)
    return HistoryResponse(session_id=session_id, commands=list(session.history))


@router.get("/{session_id}/filesystem", response_model=FilesystemResponse)
async def export_filesystem(session_id: str, manager: SessionManagerDep):
    """Export a session's tree in seed format.

    The exported tree can be posted back as the ``seed`` of a new session.
    """
    session = manager.get(session_id)
    return FilesystemResponse(
        session_id=session_id,
        filesystem=session.export_filesystem(),
        summary=session.filesystem.summary,
    )


@router.post("/{session_id}/reset", response_model=SessionInfoResponse)
async def reset_session(session_id: str, manager: SessionManagerDep):
    """Rebuild a session from its original seed, keeping its id.

    Args:
        session_id: The session to reset.
        manager: The SessionManager instance (injected by FastAPI).

    Returns:
        Snapshot of the fresh session.
    """
    return session_info(manager.reset(session_id))
