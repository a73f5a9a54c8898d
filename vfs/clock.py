"""Time sources for node and event timestamps.

The filesystem never calls the wall clock directly. A Clock is injected into
VirtualFileSystem so tests can pin createdAt/modifiedAt and event timestamps
to exact values.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, Field, field_validator


class Clock(ABC):
    """Source of timezone-aware "current" timestamps."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time (timezone-aware)."""


class SystemClock(Clock):
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class ManualClock(BaseModel, Clock):
    """A clock that only moves when told to.

    Args:
        current_time: The timestamp returned by now() (timezone-aware).
        tick: Amount to advance automatically after every now() call.
            Zero keeps the clock frozen.
    """

    current_time: datetime = Field(
        default_factory=lambda: datetime(2025, 1, 1, tzinfo=timezone.utc),
        description="The timestamp returned by now() (timezone-aware)",
    )
    tick: timedelta = Field(
        default=timedelta(0),
        description="Automatic advancement applied after each now() call",
    )

    @field_validator("current_time")
    @classmethod
    def validate_timezone_aware(cls, v: datetime) -> datetime:
        """Ensure datetime is timezone-aware."""
        if v.tzinfo is None:
            raise ValueError("Datetime must be timezone-aware (recommend UTC)")
        return v

    @field_validator("tick")
    @classmethod
    def validate_tick(cls, v: timedelta) -> timedelta:
        """Ensure the automatic tick never moves time backwards."""
        if v < timedelta(0):
            raise ValueError("tick cannot be negative")
        return v

    def now(self) -> datetime:
        current = self.current_time
        if self.tick:
            self.current_time = current + self.tick
        return current

    def advance(self, delta: timedelta) -> None:
        """Advance the clock by delta.

        Raises:
            ValueError: If delta is negative.
        """
        if delta < timedelta(0):
            raise ValueError("Cannot advance time backwards")
        self.current_time += delta

    def set_time(self, new_time: datetime) -> None:
        """Jump to new_time.

        Raises:
            ValueError: If new_time is naive or earlier than the current time.
        """
        if new_time.tzinfo is None:
            raise ValueError("new_time must be timezone-aware")
        if new_time < self.current_time:
            raise ValueError(
                f"Cannot set time backwards: {new_time} < {self.current_time}"
            )
        self.current_time = new_time
