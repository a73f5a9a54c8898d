"""Exception hierarchy for the virtual filesystem API client.

Exception Hierarchy:
    VFSClientError (base)
    ├── ConnectionError - Network/connection failures
    ├── TimeoutError - Request timeout
    └── APIError - Server returned an error response
        ├── BadRequestError (HTTP 400)
        ├── ForbiddenError (HTTP 403)
        ├── NotFoundError (HTTP 404)
        ├── ConflictError (HTTP 409)
        ├── ValidationError (HTTP 422)
        └── ServerError (HTTP 5xx)

Example:
    Catching specific errors::

        try:
            client.fs.mkdir("docs")
        except ConflictError:
            # Name already taken
            pass
        except NotFoundError as e:
            print(f"Missing parent: {e.path}")

    Catching all client errors::

        try:
            client.fs.cat("notes.txt")
        except VFSClientError as e:
            print(f"Client error: {e}")
"""

from typing import Any


class VFSClientError(Exception):
    """Base exception for all client errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ConnectionError(VFSClientError):
    """Failed to connect to the filesystem server.

    Attributes:
        message: Human-readable error description.
        url: The URL that failed to connect.
        cause: The underlying exception that caused the connection failure.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.url = url
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.url:
            return f"{self.message} (url: {self.url})"
        return self.message


class TimeoutError(VFSClientError):
    """Request timed out.

    Attributes:
        message: Human-readable error description.
        timeout: The timeout value in seconds.
        url: The URL that timed out.
    """

    def __init__(
        self,
        message: str,
        timeout: float | None = None,
        url: str | None = None,
    ) -> None:
        self.timeout = timeout
        self.url = url
        super().__init__(message)

    def __str__(self) -> str:
        extras = []
        if self.timeout is not None:
            extras.append(f"timeout: {self.timeout}s")
        if self.url:
            extras.append(f"url: {self.url}")
        if not extras:
            return self.message
        return f"{self.message} ({', '.join(extras)})"


class APIError(VFSClientError):
    """Server returned an error response.

    Base class for all API-level errors. The server reports filesystem errors
    with the name of the server-side exception class, which is kept in
    error_type (e.g. "PathNotFoundError", "DirectoryNotEmptyError").

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code from the server.
        error_type: Server-side error type, if reported.
        path: Filesystem path the error concerns, if reported.
        details: Additional error details from the response.
        response_body: Raw response body for debugging.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        error_type: str | None = None,
        path: str | None = None,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        self.status_code = status_code
        self.error_type = error_type
        self.path = path
        self.details = details
        self.response_body = response_body
        super().__init__(message)

    def __str__(self) -> str:
        if self.error_type:
            return f"[HTTP {self.status_code}] [{self.error_type}] {self.message}"
        return f"[HTTP {self.status_code}] {self.message}"


class BadRequestError(APIError):
    """Operation rejected (HTTP 400).

    Raised for wrong node kinds (reading a directory, listing a file),
    invalid paths and attempts to remove the root.
    """

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message=message, status_code=400, **kwargs)


class ForbiddenError(APIError):
    """Operation not allowed by server configuration (HTTP 403).

    Raised by ``client.fs.exec`` when file execution is disabled.
    """

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message=message, status_code=403, **kwargs)


class NotFoundError(APIError):
    """Path not found (HTTP 404)."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message=message, status_code=404, **kwargs)


class ConflictError(APIError):
    """State conflict (HTTP 409).

    Raised when a name is already taken or a directory is not empty.

    Example:
        try:
            client.fs.rm("docs")
        except ConflictError:
            # Empty the directory first
            for entry in client.fs.ls("docs").entries:
                client.fs.rm(f"docs/{entry.name}")
            client.fs.rm("docs")
    """

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message=message, status_code=409, **kwargs)


class ValidationError(APIError):
    """Request validation failed (HTTP 422).

    The details attribute holds the field-level errors.
    """

    def __init__(self, message: str, **kwargs: Any) -> None:
        if kwargs.get("error_type") is None:
            kwargs["error_type"] = "validation_error"
        super().__init__(message=message, status_code=422, **kwargs)


class ServerError(APIError):
    """Server-side error (HTTP 5xx).

    Raised for transport failures (503) and internal errors (500). When retry
    is enabled, 502/503/504 responses to GET requests are retried before this
    is raised. POST requests are not re-sent, since a 503 from a failed event
    publish arrives after the mutation was applied.
    """

    def __init__(self, message: str, status_code: int = 500, **kwargs: Any) -> None:
        super().__init__(message=message, status_code=status_code, **kwargs)
