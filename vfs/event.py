"""Filesystem mutation events and their wire format."""

import json
from datetime import datetime
from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from vfs.errors import SerializationError, UnknownEventTypeError


class FileSystemEventType(IntEnum):
    """Kind of mutation an event records.

    The integer values are the wire encoding and must not change.
    """

    CREATE_FILE = 0
    CREATE_DIR = 1
    WRITE_FILE = 2
    DELETE = 3


class FileSystemEvent(BaseModel):
    """A committed mutation of the tree.

    Events are created by the operation layer right after a mutation
    succeeds and are never modified afterwards. Replaying them in order
    against an empty tree rebuilds the tree that produced them.

    Wire format (one JSON object per event)::

        {"event_type": 2, "path": "/notes.txt", "content": "hi",
         "timestamp": "2025-01-01T00:00:00Z"}

    Args:
        event_type: Which mutation happened.
        path: Absolute path the mutation targeted.
        content: New file content (WRITE_FILE only, otherwise empty).
        timestamp: When the mutation was committed.
    """

    model_config = ConfigDict(frozen=True)

    event_type: FileSystemEventType = Field(description="Which mutation happened")
    path: str = Field(description="Absolute path the mutation targeted")
    content: str = Field(default="", description="New file content (WRITE_FILE only)")
    timestamp: datetime = Field(description="When the mutation was committed")

    def to_json(self) -> str:
        """Encode this event to its wire form.

        Raises:
            SerializationError: If the event cannot be encoded.
        """
        try:
            return self.model_dump_json()
        except (ValueError, TypeError) as e:
            raise SerializationError(f"failed to encode event: {e}") from e

    @classmethod
    def from_json(cls, raw: str | bytes) -> "FileSystemEvent":
        """Decode an event from its wire form.

        Args:
            raw: One JSON object as text or UTF-8 bytes.

        Returns:
            The decoded event.

        Raises:
            UnknownEventTypeError: If event_type is not a known value.
            SerializationError: If the payload is not a valid event.
        """
        try:
            data = json.loads(raw)
        except (ValueError, TypeError) as e:
            raise SerializationError(f"failed to decode event: {e}", raw=_as_text(raw)) from e

        if not isinstance(data, dict):
            raise SerializationError("event payload must be a JSON object", raw=_as_text(raw))

        event_type = data.get("event_type")
        if isinstance(event_type, int) and not isinstance(event_type, bool):
            if event_type not in FileSystemEventType._value2member_map_:
                raise UnknownEventTypeError(event_type)

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise SerializationError(f"invalid event payload: {e}", raw=_as_text(raw)) from e

    def get_summary(self) -> str:
        """Return a one-line description for logging."""
        time_str = self.timestamp.strftime("%Y-%m-%d %H:%M:%S")
        summary = f"[{time_str}] {self.event_type.name} {self.path}"
        if self.event_type == FileSystemEventType.WRITE_FILE:
            summary += f" ({len(self.content)} chars)"
        return summary

    def to_dict(self) -> dict[str, Any]:
        """Convert this event to a JSON-compatible dictionary."""
        return {
            "event_type": int(self.event_type),
            "event_name": self.event_type.name,
            "path": self.path,
            "content": self.content,
            "timestamp": self.timestamp.isoformat(),
        }


def _as_text(raw: str | bytes) -> str:
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw
