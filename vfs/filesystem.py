"""Virtual filesystem facade and operation layer.

VirtualFileSystem composes the node tree, the event log and the restoring
flag. Every mutating operation changes the tree first and logs exactly one
event afterwards (write_file on a new path logs two: CREATE_FILE, then
WRITE_FILE). Reads and directory changes log nothing; the working directory
is session state, not durable state.

There is no locking. One instance supports one writer at a time; callers
sharing an instance across threads must serialise access themselves.
"""

import logging
from typing import TYPE_CHECKING, Any, Optional

from vfs.clock import Clock, SystemClock
from vfs.errors import (
    AlreadyExistsError,
    DirectoryNotEmptyError,
    InvalidPathError,
    IsDirectoryError,
    NotDirectoryError,
    PathNotFoundError,
    RootRemovalError,
    TransportError,
    VFSError,
)
from vfs.event import FileSystemEvent, FileSystemEventType
from vfs.event_log import EventLog
from vfs.node import Node
from vfs.transport import DEFAULT_EVENTS_KEY, EventTransport
from vfs.tree import Tree

if TYPE_CHECKING:
    from vfs.executor import ScriptExecutor

logger = logging.getLogger(__name__)


class VirtualFileSystem:
    """In-memory hierarchical filesystem persisted as an event log.

    When a transport is given, the constructor restores the stored history
    and replays it with logging suppressed. A failed restore or replay is
    logged and the filesystem starts empty instead, with a fresh log still
    bound to the transport. The unreadable history stays in the queue, so
    the key must be cleared before a later restart can restore anything.

    Attributes:
        clock: Source of node and event timestamps.
        tree: Node arena, root and working directory.
        event_log: Record of committed mutations.
        is_restoring: While True, mutations are not logged.

    Example:
        fs = VirtualFileSystem()
        fs.mkdir("docs")
        fs.write_file("docs/readme.txt", "hello")
        fs.change_dir("docs")
        assert fs.read_file("readme.txt") == "hello"
    """

    def __init__(
        self,
        transport: Optional[EventTransport] = None,
        clock: Optional[Clock] = None,
        events_key: str = DEFAULT_EVENTS_KEY,
    ) -> None:
        self.clock = clock or SystemClock()
        self.tree = Tree.empty(self.clock.now())
        self.event_log = EventLog(transport=transport, key=events_key)
        self.is_restoring = False

        if transport is not None:
            self._bootstrap(transport, events_key)

    def _bootstrap(self, transport: EventTransport, key: str) -> None:
        """Restore the event history from transport and replay it."""
        try:
            restored = EventLog.restore(transport, key)
            self.event_log = restored
            self.is_restoring = True
            try:
                restored.replay(self)
            finally:
                self.is_restoring = False
        except VFSError as e:
            logger.error(
                f"Failed to restore filesystem from {key}: {e}. Starting with an "
                f"empty tree; new events are still appended to {key}, which must "
                f"be cleared or repaired before the next restart can restore them."
            )
            self.tree = Tree.empty(self.clock.now())
            self.event_log = EventLog(transport=transport, key=key)
            return

        logger.info(
            f"Restored filesystem from {key}: {len(self.event_log)} event(s), "
            f"{len(self.tree.nodes)} node(s)"
        )

    # ===== Path Helpers =====

    @property
    def working_dir(self) -> str:
        """Absolute path of the current working directory."""
        return self.tree.path_of(self.tree.cwd)

    def absolute_path(self, path: str) -> str:
        """Return path in absolute form, relative to the working directory."""
        return self.tree.absolute(path)

    def resolve(self, path: str) -> Node:
        """Return the node path denotes.

        Raises:
            PathNotFoundError: If any segment is missing.
        """
        return self.tree.resolve(path)

    # ===== Mutating Operations =====

    def mkdir(self, path: str) -> None:
        """Create an empty directory.

        Raises:
            AlreadyExistsError: If the name is taken by a file or directory.
            InvalidPathError: If the path has no usable final name.
            PathNotFoundError: If the parent does not exist.
            NotDirectoryError: If the parent is a file.
        """
        absolute = self._create_node(path, is_directory=True)
        self._record(FileSystemEventType.CREATE_DIR, absolute)

    def create_file(self, path: str) -> None:
        """Create an empty file.

        Raises:
            AlreadyExistsError: If the name is taken by a file or directory.
            InvalidPathError: If the path has no usable final name.
            PathNotFoundError: If the parent does not exist.
            NotDirectoryError: If the parent is a file.
        """
        absolute = self._create_node(path, is_directory=False)
        self._record(FileSystemEventType.CREATE_FILE, absolute)

    def write_file(self, path: str, content: str) -> None:
        """Replace a file's content, creating the file if it is missing.

        Creating the file goes through create_file and logs its own
        CREATE_FILE event before the WRITE_FILE event.

        A failed push to the transport does not stop the write: the content
        is stored and both events are logged in memory before the first
        TransportError is raised.

        Raises:
            IsDirectoryError: If the path is a directory.
            PathNotFoundError: If the file is missing and so is its parent.
            NotDirectoryError: If the file is missing and its parent is a file.
            TransportError: If an event could not be pushed; the write is
                still applied.
        """
        absolute = self.tree.absolute(path)
        publish_error: Optional[TransportError] = None
        try:
            node = self.tree.resolve(absolute)
        except PathNotFoundError:
            # The file exists once create_file has logged it, even if the
            # push failed; the write still goes ahead.
            try:
                self.create_file(absolute)
            except TransportError as e:
                publish_error = e
            node = self.tree.resolve(absolute)

        if node.is_directory:
            raise IsDirectoryError(path, action="write to")

        node.content = content
        node.touch(self.clock.now())
        try:
            self._record(FileSystemEventType.WRITE_FILE, absolute, content)
        except TransportError as e:
            raise publish_error or e

        if publish_error is not None:
            raise publish_error

    def remove(self, path: str) -> None:
        """Remove a file or an empty directory.

        The DELETE event records the node's canonical absolute path, so the
        log replays correctly regardless of the working directory at replay
        time. Removing the working directory moves it to the parent.

        Raises:
            RootRemovalError: If the path is the root.
            DirectoryNotEmptyError: If the directory has children.
            PathNotFoundError: If the path does not exist.
        """
        node = self.tree.resolve(path)
        if node.node_id == self.tree.root_id:
            raise RootRemovalError(path)
        if node.is_directory and node.children:
            raise DirectoryNotEmptyError(path)

        canonical = self.tree.path_of(node)
        if node.node_id == self.tree.cwd_id:
            self.tree.set_cwd(self.tree.parent_of(node) or self.tree.root)

        self.tree.detach(node, self.clock.now())
        self._record(FileSystemEventType.DELETE, canonical)

    # ===== Non-mutating Operations =====

    def read_file(self, path: str) -> str:
        """Return a file's content verbatim.

        Raises:
            IsDirectoryError: If the path is a directory.
            PathNotFoundError: If the path does not exist.
        """
        node = self.tree.resolve(path)
        if node.is_directory:
            raise IsDirectoryError(path, action="read")
        return node.content

    def list_dir(self, path: str = "") -> list[Node]:
        """Return the direct children of a directory, sorted by name.

        Args:
            path: Directory to list (empty means the working directory).

        Raises:
            NotDirectoryError: If the path is a file.
            PathNotFoundError: If the path does not exist.
        """
        node = self.tree.resolve(path)
        if not node.is_directory:
            raise NotDirectoryError(path)
        return self.tree.children_of(node)

    def change_dir(self, path: str) -> None:
        """Make path the working directory.

        Raises:
            NotDirectoryError: If the path is a file.
            PathNotFoundError: If the path does not exist.
        """
        node = self.tree.resolve(path)
        if not node.is_directory:
            raise NotDirectoryError(path)
        self.tree.set_cwd(node)

    def exec_file(self, path: str, executor: "ScriptExecutor") -> int:
        """Run a file's content as a host script and return its exit code.

        Only the file's name and content are handed to the executor.

        Raises:
            IsDirectoryError: If the path is a directory.
            PathNotFoundError: If the path does not exist.
            ExecutionError: If the script cannot be launched.
        """
        node = self.tree.resolve(path)
        if node.is_directory:
            raise IsDirectoryError(path, action="execute")
        return executor.run(node.name, node.content)

    # ===== Replay Helpers =====

    def rebuild(self) -> "VirtualFileSystem":
        """Replay this filesystem's log into a fresh, transport-less instance.

        Raises:
            VFSError: If replay fails.
        """
        fresh = VirtualFileSystem(clock=self.clock)
        fresh.is_restoring = True
        try:
            self.event_log.replay(fresh)
        finally:
            fresh.is_restoring = False
        return fresh

    def get_snapshot(self) -> dict[str, Any]:
        """Return a complete snapshot of the filesystem for API responses."""
        return {
            "working_dir": self.working_dir,
            "event_count": len(self.event_log),
            "node_count": len(self.tree.nodes),
            "tree": self.tree.get_snapshot(),
        }

    def validate_state(self) -> list[str]:
        """Validate tree consistency and return any issues."""
        return self.tree.validate_state()

    @property
    def summary(self) -> str:
        directories = sum(1 for n in self.tree.nodes.values() if n.is_directory)
        files = len(self.tree.nodes) - directories
        return f"{directories} directories, {files} files, {len(self.event_log)} events"

    # ===== Internals =====

    def _create_node(self, path: str, is_directory: bool) -> str:
        """Insert a new empty node at path and return its absolute path."""
        if path == "":
            raise InvalidPathError(path)

        absolute = self.tree.absolute(path)
        parent, name = self.tree.split_parent(absolute)
        if name in parent.children:
            raise AlreadyExistsError(name, path=absolute)

        now = self.clock.now()
        node = self.tree.new_node(name, is_directory, now)
        self.tree.attach(parent, node, now)
        return absolute

    def _record(
        self, event_type: FileSystemEventType, path: str, content: str = ""
    ) -> None:
        """Log a committed mutation unless a restore is in progress."""
        if self.is_restoring:
            return
        event = FileSystemEvent(
            event_type=event_type,
            path=path,
            content=content,
            timestamp=self.clock.now(),
        )
        self.event_log.append(event)
