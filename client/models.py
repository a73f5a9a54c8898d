"""Client response models for the virtual filesystem API client.

This module re-exports the response models from the API layer and defines
client-specific response models that don't exist in the API layer.
"""

from pydantic import BaseModel, Field

# Re-export response models from API layer for client convenience
from api.models import (
    EventEntry,
    EventListResponse,
    ExecFileResponse,
    FSActionResponse,
    ListDirResponse,
    NodeEntry,
    ReadFileResponse,
    ReplayVerificationResponse,
    SnapshotResponse,
    WorkingDirResponse,
)

__all__ = [
    # Re-exported from api.models
    "EventEntry",
    "EventListResponse",
    "ExecFileResponse",
    "FSActionResponse",
    "ListDirResponse",
    "NodeEntry",
    "ReadFileResponse",
    "ReplayVerificationResponse",
    "SnapshotResponse",
    "WorkingDirResponse",
    # Client-specific models
    "HealthResponse",
]


class HealthResponse(BaseModel):
    """Response model for the API health check.

    Attributes:
        status: Health status ("healthy").
    """

    status: str = Field(..., description="Health status")
