"""Core filesystem fixtures."""

from tests.fixtures.core.clocks import START_TIME, create_manual_clock
from tests.fixtures.core.events import (
    CONFLICTING_HISTORY,
    CREATE_AND_DELETE_HISTORY,
    HELLO_WORLD_HISTORY,
    create_fs_event,
)
from tests.fixtures.core.filesystems import create_filesystem, populate_filesystem
from tests.fixtures.core.transports import create_memory_transport, create_mock_redis

__all__ = [
    "START_TIME",
    "create_manual_clock",
    "create_fs_event",
    "HELLO_WORLD_HISTORY",
    "CREATE_AND_DELETE_HISTORY",
    "CONFLICTING_HISTORY",
    "create_filesystem",
    "populate_filesystem",
    "create_memory_transport",
    "create_mock_redis",
]
