"""Append-only event log with replay and restore."""

import logging
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Optional

from vfs.errors import UnknownEventTypeError
from vfs.event import FileSystemEvent, FileSystemEventType
from vfs.transport import DEFAULT_EVENTS_KEY, EventTransport

if TYPE_CHECKING:
    from vfs.filesystem import VirtualFileSystem

logger = logging.getLogger(__name__)


_REPLAY_HANDLERS: dict[
    FileSystemEventType, Callable[["VirtualFileSystem", FileSystemEvent], object]
] = {
    FileSystemEventType.CREATE_FILE: lambda fs, event: fs.create_file(event.path),
    FileSystemEventType.CREATE_DIR: lambda fs, event: fs.mkdir(event.path),
    FileSystemEventType.WRITE_FILE: lambda fs, event: fs.write_file(
        event.path, event.content
    ),
    FileSystemEventType.DELETE: lambda fs, event: fs.remove(event.path),
}


class EventLog:
    """Ordered record of every committed mutation.

    Insertion order is causal order: replaying the events in order against
    an empty filesystem rebuilds the filesystem that produced them. When a
    transport is configured, every appended event is also pushed to the
    tail of a durable queue so the log can be restored in a later process.

    Attributes:
        transport: Durable queue to publish to, or None for memory only.
        key: Queue key events are pushed to and restored from.
    """

    def __init__(
        self,
        transport: Optional[EventTransport] = None,
        key: str = DEFAULT_EVENTS_KEY,
        events: Optional[list[FileSystemEvent]] = None,
    ) -> None:
        self.transport = transport
        self.key = key
        self._events: list[FileSystemEvent] = list(events or [])

    @property
    def events(self) -> tuple[FileSystemEvent, ...]:
        """Read-only view of the recorded events, oldest first."""
        return tuple(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[FileSystemEvent]:
        return iter(tuple(self._events))

    def append(self, event: FileSystemEvent) -> None:
        """Record an event and publish it to the transport, if any.

        The in-memory append always happens first and is never undone. The
        tree mutation the event describes has already been applied, so a
        failed publish leaves memory and the durable queue out of step.

        Args:
            event: The committed mutation.

        Raises:
            SerializationError: If the event cannot be encoded.
            TransportError: If the transport rejects the push.
        """
        self._events.append(event)
        logger.debug(f"Logged {event.get_summary()}")

        if self.transport is None:
            return

        self.transport.push(self.key, event.to_json())

    def replay(self, target: "VirtualFileSystem") -> None:
        """Re-apply every recorded event, in order, to target.

        Replay stops at the first failing event and raises its error.
        Events before it stay applied; there is no rollback.

        Callers replaying into the filesystem that owns this log must set
        target.is_restoring first, otherwise the replayed operations are
        logged a second time.

        Args:
            target: Filesystem to apply the events to.

        Raises:
            UnknownEventTypeError: If an event has an unrecognised type.
            VFSError: Whatever the replayed operation raises.
        """
        for index, event in enumerate(tuple(self._events)):
            handler = _REPLAY_HANDLERS.get(event.event_type)
            if handler is None:
                raise UnknownEventTypeError(event.event_type)
            try:
                handler(target, event)
            except Exception:
                logger.warning(
                    f"Replay stopped at event {index} of {len(self._events)}: "
                    f"{event.get_summary()}"
                )
                raise

    @classmethod
    def restore(
        cls, transport: EventTransport, key: str = DEFAULT_EVENTS_KEY
    ) -> "EventLog":
        """Load the full event history from a transport.

        Reads the whole queue in one range read and decodes every entry. The
        returned log is bound to the same transport and key but has not been
        replayed.

        Args:
            transport: Durable queue to read from.
            key: Queue key to read.

        Returns:
            A new EventLog preloaded with the stored events.

        Raises:
            TransportError: If the queue cannot be read.
            SerializationError: If an entry is not a valid event.
            UnknownEventTypeError: If an entry has an unknown event type.
        """
        entries = transport.range_read(key, 0, -1)
        events = [FileSystemEvent.from_json(entry) for entry in entries]
        logger.info(f"Restored {len(events)} event(s) from {key}")
        return cls(transport=transport, key=key, events=events)
