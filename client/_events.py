"""Event log sub-client for the virtual filesystem API.

This module provides EventsClient for the event log endpoints (/events/*).

This is an internal module. Import from `client` instead.
"""

from typing import Any

from client._base import BaseClient
from client.models import EventListResponse, ReplayVerificationResponse


class EventsClient(BaseClient):
    """Client for event log endpoints (/events/*).

    Example:
        with VFSClient() as client:
            client.fs.write("notes.txt", "hi")
            log = client.events.list()
            print([e.event_name for e in log.events])
            # ['CREATE_FILE', 'WRITE_FILE']
    """

    _BASE_PATH = "/events"

    def list(
        self,
        event_type: int | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> EventListResponse:
        """Query the event log, oldest first.

        Args:
            event_type: Only return events of this type (0-3).
            limit: Maximum number of events to return.
            offset: Number of events to skip.

        Returns:
            The matching events and the total log size.
        """
        params: dict[str, Any] = {
            "event_type": event_type,
            "limit": limit,
            "offset": offset,
        }
        data = self._get(self._BASE_PATH, params=params)
        return EventListResponse(**data)

    def verify(self) -> ReplayVerificationResponse:
        """Replay the server's log into a fresh tree and compare it to the live one."""
        data = self._post(f"{self._BASE_PATH}/verify")
        return ReplayVerificationResponse(**data)
