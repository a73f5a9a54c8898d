"""Dependency injection providers for the FastAPI application.

This module owns the process-wide VirtualFileSystem and Settings and exposes
them to route handlers through FastAPI dependencies.

All route handlers are ``async def`` and call the filesystem synchronously,
so every operation runs to completion on the event loop before the next one
starts. That is what keeps the single-writer filesystem safe to share.
"""

import logging
from typing import Annotated, Optional

from fastapi import Depends

from vfs.config import Settings
from vfs.executor import ScriptExecutor
from vfs.filesystem import VirtualFileSystem
from vfs.transport import EventTransport, RedisTransport

logger = logging.getLogger(__name__)

# Global state, created when the app starts
_filesystem: Optional[VirtualFileSystem] = None
_settings: Optional[Settings] = None


def get_filesystem() -> VirtualFileSystem:
    """Get the shared VirtualFileSystem instance.

    Returns:
        The shared VirtualFileSystem instance.

    Raises:
        RuntimeError: If the filesystem hasn't been initialized yet.
    """
    if _filesystem is None:
        raise RuntimeError(
            "VirtualFileSystem not initialized. Call initialize_filesystem() first."
        )
    return _filesystem


def get_settings() -> Settings:
    """Get the active Settings, loading them from the environment on first use."""
    global _settings

    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def get_executor(settings: Annotated[Settings, Depends(get_settings)]) -> ScriptExecutor:
    """Build the script executor for the configured shell."""
    return ScriptExecutor(shell=settings.exec_shell)


def initialize_filesystem(
    settings: Optional[Settings] = None,
    transport: Optional[EventTransport] = None,
) -> VirtualFileSystem:
    """Initialize the shared VirtualFileSystem instance.

    Called once when the app starts. When no transport is passed and a Redis
    URL is configured, a RedisTransport is created and the filesystem is
    restored from it.

    Args:
        settings: Settings to use (defaults to Settings.from_env()).
        transport: Explicit transport, overriding the configured Redis URL.

    Returns:
        The newly created VirtualFileSystem instance.
    """
    global _filesystem, _settings

    _settings = settings or Settings.from_env()

    if transport is None and _settings.redis_url:
        transport = RedisTransport.from_url(_settings.redis_url)
        logger.info(f"Persisting events to Redis list {_settings.events_key}")
    elif transport is None:
        logger.info("No event transport configured; events are kept in memory only")

    _filesystem = VirtualFileSystem(transport=transport, events_key=_settings.events_key)
    return _filesystem


def shutdown_filesystem() -> None:
    """Release the shared filesystem and close its transport, if owned."""
    global _filesystem

    if _filesystem is not None:
        transport = _filesystem.event_log.transport
        if isinstance(transport, RedisTransport):
            transport.close()

    _filesystem = None


# Type aliases for dependency injection
FileSystemDep = Annotated[VirtualFileSystem, Depends(get_filesystem)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
ExecutorDep = Annotated[ScriptExecutor, Depends(get_executor)]
