"""Virtual filesystem API client library.

A typed, synchronous Python client for the event-sourced virtual filesystem
REST API.

Example:
    from client import VFSClient

    with VFSClient(base_url="http://localhost:8000") as client:
        client.fs.mkdir("docs")
        client.fs.write("docs/readme.txt", "hello")
        for entry in client.fs.ls("docs").entries:
            print(entry.name, entry.size)

Exports:
    VFSClient: Client for the REST API.
    FileSystemClient, EventsClient: Sub-clients behind client.fs / client.events.

    Exceptions:
        VFSClientError: Base exception for all client errors.
        ConnectionError: Failed to connect to the server.
        TimeoutError: Request timed out.
        APIError: Server returned an error response.
        BadRequestError, ForbiddenError, NotFoundError, ConflictError,
        ValidationError, ServerError: Status-specific API errors.
"""

from client._events import EventsClient
from client._fs import FileSystemClient
from client.client import VFSClient
from client.exceptions import (
    APIError,
    BadRequestError,
    ConflictError,
    ConnectionError,
    ForbiddenError,
    NotFoundError,
    ServerError,
    TimeoutError,
    ValidationError,
    VFSClientError,
)
from client.models import (
    EventEntry,
    EventListResponse,
    FSActionResponse,
    HealthResponse,
    ListDirResponse,
    NodeEntry,
    ReadFileResponse,
    ReplayVerificationResponse,
    SnapshotResponse,
)

__all__ = [
    # Clients
    "VFSClient",
    "FileSystemClient",
    "EventsClient",
    # Exceptions
    "VFSClientError",
    "ConnectionError",
    "TimeoutError",
    "APIError",
    "BadRequestError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "ValidationError",
    "ServerError",
    # Models
    "EventEntry",
    "EventListResponse",
    "FSActionResponse",
    "HealthResponse",
    "ListDirResponse",
    "NodeEntry",
    "ReadFileResponse",
    "ReplayVerificationResponse",
    "SnapshotResponse",
]
