"""Durable event queues the event log publishes to and restores from.

A transport is an ordered list store addressed by key with two calls:
push to the tail, and read an inclusive index range. Order of pushes must be
preserved by range reads.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

from redis import Redis
from redis.exceptions import RedisError

from vfs.errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_EVENTS_KEY = "vfs:events"


class EventTransport(ABC):
    """Ordered, append-only list store."""

    @abstractmethod
    def push(self, key: str, data: str) -> None:
        """Append data to the tail of the list at key.

        Raises:
            TransportError: If the store rejects the push.
        """

    @abstractmethod
    def range_read(self, key: str, start: int = 0, end: int = -1) -> list[str]:
        """Return entries start..end (inclusive) of the list at key.

        Negative indices count from the tail, so (0, -1) is the whole list.
        A missing key reads as an empty list.

        Raises:
            TransportError: If the store cannot be read.
        """


class InMemoryTransport(EventTransport):
    """Process-local transport with Redis list semantics.

    Useful for tests and for running without a Redis server. Contents are
    lost when the process exits.
    """

    def __init__(self, lists: dict[str, list[str]] | None = None) -> None:
        self._lists: dict[str, list[str]] = {
            key: list(values) for key, values in (lists or {}).items()
        }

    def push(self, key: str, data: str) -> None:
        self._lists.setdefault(key, []).append(data)

    def range_read(self, key: str, start: int = 0, end: int = -1) -> list[str]:
        values = self._lists.get(key, [])
        length = len(values)
        if start < 0:
            start = max(length + start, 0)
        if end < 0:
            end = length + end
        if start > end or start >= length:
            return []
        return list(values[start : end + 1])

    def length(self, key: str) -> int:
        return len(self._lists.get(key, []))

    def clear(self, key: str | None = None) -> None:
        """Drop one list, or every list when key is None."""
        if key is None:
            self._lists.clear()
        else:
            self._lists.pop(key, None)


class RedisTransport(EventTransport):
    """Transport backed by a Redis list (RPUSH / LRANGE).

    Args:
        client: A redis.Redis client. Responses may be bytes or str.
    """

    def __init__(self, client: Redis) -> None:
        self.client = client

    @classmethod
    def from_url(cls, url: str, **kwargs: Any) -> "RedisTransport":
        """Build a transport from a redis:// URL."""
        return cls(Redis.from_url(url, **kwargs))

    def push(self, key: str, data: str) -> None:
        try:
            self.client.rpush(key, data)
        except RedisError as e:
            logger.error(f"Failed to push event to Redis list {key}: {e}")
            raise TransportError("failed to push event", key=key, cause=e) from e

    def range_read(self, key: str, start: int = 0, end: int = -1) -> list[str]:
        try:
            entries = self.client.lrange(key, start, end)
        except RedisError as e:
            logger.error(f"Failed to read Redis list {key}: {e}")
            raise TransportError("failed to read events", key=key, cause=e) from e

        return [
            entry.decode("utf-8") if isinstance(entry, bytes) else entry
            for entry in entries
        ]

    def close(self) -> None:
        self.client.close()
