"""Shared request and response models for API endpoints.

This module contains models used by more than one route or by the exception
handlers. Route-specific models live next to their routes.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class SessionInfoResponse(BaseModel):
    """Snapshot of one session.

    Attributes:
        session_id: Unique identifier of the session.
        current_directory: Absolute working directory.
        created_at: When the session was created (UTC).
        command_count: Number of entries in the session history.
        environment: The session's shell variables.
        filesystem_summary: Directory and file counts, e.g. "9 directories, 5 files".
    """

    session_id: str
    current_directory: str
    created_at: datetime
    command_count: int
    environment: dict[str, str]
    filesystem_summary: str


class CreateSessionRequest(BaseModel):
    """Request model for creating a session.

    Attributes:
        seed: Seed filesystem; the service default tree is used when omitted.
        environment: Extra shell variables set after the defaults.
    """

    seed: Optional[dict[str, Any]] = Field(
        default=None,
        description="Directory tree in seed format, either {'/': {...}} or a directory node",
    )
    environment: Optional[dict[str, str]] = Field(
        default=None,
        description="Extra variables, e.g. {'EDITOR': 'vim'}",
    )


class ErrorResponse(BaseModel):
    """Standard error response model.

    Attributes:
        error: Short error title.
        detail: Human-readable explanation.
    """

    error: str
    detail: str
