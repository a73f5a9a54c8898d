"""Shared request and response models for API endpoints."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from vfs.event import FileSystemEvent
from vfs.node import Node


# Request models


class PathRequest(BaseModel):
    """Request body naming a single path.

    Attributes:
        path: Absolute path, or a path relative to the working directory.
    """

    path: str = Field(description="Absolute or working-directory-relative path")


class WriteFileRequest(BaseModel):
    """Request to replace a file's content (creating the file if needed).

    Attributes:
        path: Target file path.
        content: New content for the file.
    """

    path: str = Field(description="Target file path")
    content: str = Field(default="", description="New content for the file")


# Response models


class FSActionResponse(BaseModel):
    """Response for mutating operations and directory changes.

    Attributes:
        path: Absolute form of the path the operation targeted.
        working_dir: Working directory after the operation.
        events_logged: Number of events the operation appended to the log.
        message: Human-readable message describing the result.
    """

    path: str
    working_dir: str
    events_logged: int
    message: str


class WorkingDirResponse(BaseModel):
    """Response containing the working directory.

    Attributes:
        working_dir: Absolute path of the working directory.
    """

    working_dir: str


class NodeEntry(BaseModel):
    """One entry of a directory listing.

    Attributes:
        name: Entry name.
        is_directory: Whether the entry is a directory.
        size: Content length for files, None for directories.
        created_at: When the entry was created.
        modified_at: When the entry last changed.
    """

    name: str
    is_directory: bool
    size: Optional[int] = None
    created_at: datetime
    modified_at: datetime

    @classmethod
    def from_node(cls, node: Node) -> "NodeEntry":
        return cls(
            name=node.name,
            is_directory=node.is_directory,
            size=None if node.is_directory else len(node.content),
            created_at=node.created_at,
            modified_at=node.modified_at,
        )


class ListDirResponse(BaseModel):
    """Response containing a directory listing.

    Attributes:
        path: Absolute path of the listed directory.
        entries: Children sorted by name.
        count: Number of entries.
    """

    path: str
    entries: list[NodeEntry]
    count: int


class ReadFileResponse(BaseModel):
    """Response containing a file's content.

    Attributes:
        path: Absolute path of the file.
        content: File content, verbatim.
    """

    path: str
    content: str


class ExecFileResponse(BaseModel):
    """Response for a file execution.

    Attributes:
        path: Absolute path of the executed file.
        exit_code: Process exit code (negative if killed by a signal).
    """

    path: str
    exit_code: int


class SnapshotResponse(BaseModel):
    """Response containing the whole tree.

    Attributes:
        working_dir: Absolute path of the working directory.
        event_count: Number of events in the log.
        node_count: Number of nodes, including the root.
        tree: Nested snapshot of the tree.
    """

    working_dir: str
    event_count: int
    node_count: int
    tree: dict[str, Any]


class EventEntry(BaseModel):
    """One event of the log as returned by the API.

    Attributes:
        index: Position in the log (0 = oldest).
        event_type: Wire value of the event type.
        event_name: Name of the event type.
        path: Path the event targeted.
        content: Written content (WRITE_FILE only).
        timestamp: When the mutation was committed.
    """

    index: int
    event_type: int
    event_name: str
    path: str
    content: str
    timestamp: datetime

    @classmethod
    def from_event(cls, index: int, event: FileSystemEvent) -> "EventEntry":
        return cls(
            index=index,
            event_type=int(event.event_type),
            event_name=event.event_type.name,
            path=event.path,
            content=event.content,
            timestamp=event.timestamp,
        )


class EventListResponse(BaseModel):
    """Response containing a slice of the event log.

    Attributes:
        events: Events in log order.
        count: Number of events returned.
        total_count: Number of events in the log.
    """

    events: list[EventEntry]
    count: int
    total_count: int


class ReplayVerificationResponse(BaseModel):
    """Result of replaying the log into a fresh tree.

    Attributes:
        consistent: Whether the rebuilt tree matches the live tree.
        events_replayed: Number of events replayed.
        live_node_count: Nodes in the live tree.
        rebuilt_node_count: Nodes in the rebuilt tree.
        error: Replay error message, if replay failed.
    """

    consistent: bool
    events_replayed: int
    live_node_count: int
    rebuilt_node_count: int
    error: Optional[str] = None
