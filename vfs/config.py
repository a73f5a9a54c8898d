"""Runtime settings loaded from environment variables.

Variables (a .env file in the working directory is loaded first):
    VFS_REDIS_URL: redis:// URL of the durable event queue. Unset means the
        event log stays in memory only.
    VFS_EVENTS_KEY: Redis list key holding the events (default "vfs:events").
    VFS_LOG_LEVEL: Logging level name (default "INFO").
    VFS_ALLOW_EXEC: Enable POST /fs/exec ("1", "true", "yes", "on").
    VFS_EXEC_SHELL: Interpreter used for executed files (default "/bin/sh").
"""

import logging
import os
from collections.abc import Mapping
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from vfs.executor import DEFAULT_SHELL
from vfs.transport import DEFAULT_EVENTS_KEY

_TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Filesystem service settings.

    Args:
        redis_url: URL of the durable event queue, or None for memory only.
        events_key: List key events are pushed to and restored from.
        log_level: Logging level name.
        allow_exec: Whether files may be executed through the API.
        exec_shell: Interpreter placed on executed scripts' shebang line.
    """

    redis_url: Optional[str] = Field(
        default=None, description="URL of the durable event queue"
    )
    events_key: str = Field(
        default=DEFAULT_EVENTS_KEY, description="List key holding the events"
    )
    log_level: str = Field(default="INFO", description="Logging level name")
    allow_exec: bool = Field(
        default=False, description="Whether files may be executed through the API"
    )
    exec_shell: str = Field(
        default=DEFAULT_SHELL, description="Interpreter for executed scripts"
    )

    @field_validator("events_key")
    @classmethod
    def validate_events_key(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("events_key cannot be empty")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        Args:
            environ: Mapping to read instead of os.environ. When omitted, a
                .env file is loaded into os.environ first.

        Returns:
            Populated Settings instance.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        data: dict[str, object] = {}
        if environ.get("VFS_REDIS_URL"):
            data["redis_url"] = environ["VFS_REDIS_URL"]
        if environ.get("VFS_EVENTS_KEY"):
            data["events_key"] = environ["VFS_EVENTS_KEY"]
        if environ.get("VFS_LOG_LEVEL"):
            data["log_level"] = environ["VFS_LOG_LEVEL"]
        if "VFS_ALLOW_EXEC" in environ:
            data["allow_exec"] = environ["VFS_ALLOW_EXEC"].strip().lower() in _TRUTHY
        if environ.get("VFS_EXEC_SHELL"):
            data["exec_shell"] = environ["VFS_EXEC_SHELL"]

        return cls(**data)
