"""Event-sourced virtual filesystem package.

This package contains the node tree and path resolver, the operation layer,
and the event log that persists every mutation and rebuilds the tree by
replaying it.
"""

from vfs.clock import Clock, ManualClock, SystemClock
from vfs.errors import (
    AlreadyExistsError,
    DirectoryNotEmptyError,
    ExecutionError,
    InvalidPathError,
    IsDirectoryError,
    NodeTypeError,
    NotDirectoryError,
    PathNotFoundError,
    RootRemovalError,
    SerializationError,
    TransportError,
    UnknownEventTypeError,
    VFSError,
)
from vfs.event import FileSystemEvent, FileSystemEventType
from vfs.event_log import EventLog
from vfs.executor import ScriptExecutor
from vfs.filesystem import VirtualFileSystem
from vfs.node import Node
from vfs.transport import (
    DEFAULT_EVENTS_KEY,
    EventTransport,
    InMemoryTransport,
    RedisTransport,
)
from vfs.tree import SEPARATOR, Tree

__all__ = [
    "Clock",
    "ManualClock",
    "SystemClock",
    "VFSError",
    "PathNotFoundError",
    "AlreadyExistsError",
    "InvalidPathError",
    "NodeTypeError",
    "NotDirectoryError",
    "IsDirectoryError",
    "DirectoryNotEmptyError",
    "RootRemovalError",
    "UnknownEventTypeError",
    "TransportError",
    "SerializationError",
    "ExecutionError",
    "FileSystemEvent",
    "FileSystemEventType",
    "EventLog",
    "ScriptExecutor",
    "VirtualFileSystem",
    "Node",
    "DEFAULT_EVENTS_KEY",
    "EventTransport",
    "InMemoryTransport",
    "RedisTransport",
    "SEPARATOR",
    "Tree",
]
