"""Exception hierarchy for the virtual filesystem.

All errors raised by the filesystem core inherit from VFSError, so callers
can catch the whole family or a specific failure.

Exception Hierarchy:
    VFSError (base)
    ├── PathNotFoundError - a path segment does not exist
    ├── AlreadyExistsError - name collision on create
    ├── InvalidPathError - path has no usable final name ("", ".", "..")
    ├── NodeTypeError
    │   ├── NotDirectoryError - a directory was required, found a file
    │   └── IsDirectoryError - a file was required, found a directory
    ├── DirectoryNotEmptyError - remove on a directory with children
    ├── RootRemovalError - remove on the root directory
    ├── UnknownEventTypeError - corrupt or foreign log entry
    ├── TransportError - durable queue push/read failure
    ├── SerializationError - event encode/decode failure
    └── ExecutionError - a script could not be launched
"""


class VFSError(Exception):
    """Base exception for all virtual filesystem errors.

    Attributes:
        message: Human-readable error description.
        path: The path the failing operation was given, if any.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class PathNotFoundError(VFSError):
    """A segment of a path could not be found during resolution.

    Attributes:
        segment: The name that was missing.
    """

    def __init__(self, segment: str, path: str | None = None) -> None:
        self.segment = segment
        super().__init__(f"path not found: {segment}", path=path)


class AlreadyExistsError(VFSError):
    """A file or directory with the requested name already exists."""

    def __init__(self, name: str, path: str | None = None) -> None:
        self.name = name
        super().__init__(f"file or directory already exists: {name}", path=path)


class InvalidPathError(VFSError):
    """The path does not end in a name that can be created."""

    def __init__(self, path: str) -> None:
        super().__init__(f"invalid path: {path!r}", path=path)


class NodeTypeError(VFSError):
    """The resolved node is the wrong kind for the operation."""


class NotDirectoryError(NodeTypeError):
    """A directory was required but the path resolved to a file."""

    def __init__(self, path: str) -> None:
        super().__init__(f"not a directory: {path}", path=path)


class IsDirectoryError(NodeTypeError):
    """A file was required but the path resolved to a directory.

    Args:
        path: The offending path.
        action: Verb used in the message ("read", "write to", "execute").
    """

    def __init__(self, path: str, action: str = "read") -> None:
        self.action = action
        super().__init__(f"cannot {action} directory: {path}", path=path)


class DirectoryNotEmptyError(VFSError):
    """Attempted to remove a directory that still has children."""

    def __init__(self, path: str) -> None:
        super().__init__(f"directory not empty: {path}", path=path)


class RootRemovalError(VFSError):
    """Attempted to remove the root directory."""

    def __init__(self, path: str = "/") -> None:
        super().__init__("cannot remove root directory", path=path)


class UnknownEventTypeError(VFSError):
    """An event carried a type outside the known set.

    Attributes:
        event_type: The raw, unrecognised event type value.
    """

    def __init__(self, event_type: object) -> None:
        self.event_type = event_type
        super().__init__(f"unknown event type: {event_type!r}")


class TransportError(VFSError):
    """The durable event queue rejected a push or range read.

    Attributes:
        key: Queue key involved in the failed call.
        cause: Underlying client exception, if any.
    """

    def __init__(
        self,
        message: str,
        key: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.key = key
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.key:
            return f"{self.message} (key: {self.key})"
        return self.message


class SerializationError(VFSError):
    """An event could not be encoded to or decoded from its wire form."""

    def __init__(self, message: str, raw: str | None = None) -> None:
        self.raw = raw
        super().__init__(message)


class ExecutionError(VFSError):
    """A virtual file could not be executed as a host process."""
