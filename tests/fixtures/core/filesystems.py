"""Fixtures for VirtualFileSystem."""

import pytest

from vfs.clock import Clock
from vfs.filesystem import VirtualFileSystem
from vfs.transport import DEFAULT_EVENTS_KEY, EventTransport
from tests.fixtures.core.clocks import create_manual_clock


def create_filesystem(
    transport: EventTransport | None = None,
    clock: Clock | None = None,
    events_key: str = DEFAULT_EVENTS_KEY,
) -> VirtualFileSystem:
    """Create a VirtualFileSystem with a frozen clock by default.

    Args:
        transport: Durable queue to restore from and publish to.
        clock: Time source (default: a frozen ManualClock).
        events_key: Queue key.

    Returns:
        VirtualFileSystem instance ready for testing.
    """
    return VirtualFileSystem(
        transport=transport,
        clock=clock or create_manual_clock(),
        events_key=events_key,
    )


def populate_filesystem(fs: VirtualFileSystem) -> VirtualFileSystem:
    """Build a small tree used by several tests.

    Layout::

        /
        ├── docs/
        │   ├── readme.txt  ("hello")
        │   └── guides/
        ├── empty/
        └── notes.txt       ("todo")
    """
    fs.mkdir("docs")
    fs.mkdir("docs/guides")
    fs.mkdir("empty")
    fs.write_file("docs/readme.txt", "hello")
    fs.write_file("notes.txt", "todo")
    return fs


@pytest.fixture
def fs(frozen_clock):
    """Provide an empty, transport-less filesystem."""
    return create_filesystem(clock=frozen_clock)


@pytest.fixture
def populated_fs(ticking_clock):
    """Provide a filesystem holding the populate_filesystem() layout."""
    return populate_filesystem(create_filesystem(clock=ticking_clock))
