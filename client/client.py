"""Main client class for the virtual filesystem API.

VFSClient gives namespaced access to the API through sub-client properties
(client.fs, client.events).

Example:
    with VFSClient(base_url="http://localhost:8000") as client:
        client.fs.mkdir("dir1")
        client.fs.write("dir1/file.txt", "Hello, world!")
        print(client.fs.cat("dir1/file.txt").content)
        assert client.events.verify().consistent
"""

from typing import Any

from client._events import EventsClient
from client._fs import FileSystemClient
from client._http import HTTPClient
from client.exceptions import VFSClientError
from client.models import HealthResponse


class VFSClient:
    """Synchronous client for the virtual filesystem REST API.

    Supports the context manager protocol for automatic resource cleanup.

    Attributes:
        base_url: The base URL of the filesystem server.
        timeout: Request timeout in seconds.
        retry_enabled: Whether automatic retry is enabled.
        max_retries: Maximum number of retry attempts.

    Example:
        Manual lifecycle management::

            client = VFSClient()
            try:
                client.fs.touch("empty.txt")
            finally:
                client.close()
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: Any = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: The base URL of the server (default: http://localhost:8000).
            timeout: Request timeout in seconds (default: 30.0).
            retry_enabled: Whether to automatically retry on transient failures.
                Retries on connection errors for every request, and on
                timeouts and HTTP 502/503/504 for GET requests, with
                exponential backoff (default: False).
            max_retries: Maximum number of retry attempts when retry is enabled
                (default: 3).
            transport: Custom HTTP transport (e.g., MockTransport for testing).
        """
        self.base_url = base_url
        self.timeout = timeout
        self.retry_enabled = retry_enabled
        self.max_retries = max_retries

        self._http = HTTPClient(
            base_url=base_url,
            timeout=timeout,
            retry_enabled=retry_enabled,
            max_retries=max_retries,
            transport=transport,
        )

        # Sub-clients are created on first access
        self._fs: FileSystemClient | None = None
        self._events: EventsClient | None = None

    def __enter__(self) -> "VFSClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the client and release resources."""
        self._http.close()

    @property
    def fs(self) -> FileSystemClient:
        """Access filesystem operation endpoints (/fs/*)."""
        if self._fs is None:
            self._fs = FileSystemClient(self._http)
        return self._fs

    @property
    def events(self) -> EventsClient:
        """Access event log endpoints (/events/*)."""
        if self._events is None:
            self._events = EventsClient(self._http)
        return self._events

    def health(self) -> HealthResponse:
        """Check the server's health endpoint."""
        data = self._http.get("/health")
        return HealthResponse(**data)

    def is_healthy(self) -> bool:
        """Return True if the server answers its health check as healthy.

        Connection failures and error responses count as unhealthy.
        """
        try:
            return self.health().status == "healthy"
        except VFSClientError:
            return False
