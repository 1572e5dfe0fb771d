"""Client response models for the vshell API client.

This module re-exports the models shared with the API layer and defines the
client-only models for the service endpoints outside ``/sessions``.
"""

from pydantic import BaseModel, Field

# Re-export shared models from the API layer
from api.models import CreateSessionRequest, ErrorResponse, SessionInfoResponse

__all__ = [
    "CreateSessionRequest",
    "ErrorResponse",
    "SessionInfoResponse",
    "HealthResponse",
    "ServiceInfoResponse",
]


class HealthResponse(BaseModel):
    """Response model for the health check.

    Attributes:
        status: Health status, "healthy" when the service is up.
        sessions: Number of live sessions.
    """

    status: str = Field(..., description="Health status")
    sessions: int = Field(0, description="Number of live sessions")


class ServiceInfoResponse(BaseModel):
    message: str
    version: str
    docs_url: str | None = None
