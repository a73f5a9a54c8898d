"""Exception handlers for the filesystem FastAPI application.

This module converts filesystem errors and other Python exceptions into
consistent JSON responses of the form::

    {"error": "...", "detail": "...", "type": "ExceptionClassName"}
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from vfs.errors import (
    AlreadyExistsError,
    DirectoryNotEmptyError,
    ExecutionError,
    InvalidPathError,
    NodeTypeError,
    PathNotFoundError,
    RootRemovalError,
    SerializationError,
    TransportError,
    UnknownEventTypeError,
    VFSError,
)

logger = logging.getLogger(__name__)


class ExecutionDisabledError(Exception):
    """Raised when a client asks to execute a file but execution is off.

    Args:
        message: Description of the refused operation.
    """

    def __init__(self, message: str = "File execution is disabled"):
        self.message = message
        super().__init__(message)


# Status code and error title for each filesystem error, most specific first
_VFS_ERROR_STATUS: list[tuple[type[VFSError], int, str]] = [
    (PathNotFoundError, status.HTTP_404_NOT_FOUND, "Path Not Found"),
    (AlreadyExistsError, status.HTTP_409_CONFLICT, "Already Exists"),
    (DirectoryNotEmptyError, status.HTTP_409_CONFLICT, "Directory Not Empty"),
    (NodeTypeError, status.HTTP_400_BAD_REQUEST, "Wrong Node Type"),
    (InvalidPathError, status.HTTP_400_BAD_REQUEST, "Invalid Path"),
    (RootRemovalError, status.HTTP_400_BAD_REQUEST, "Root Removal Forbidden"),
    (TransportError, status.HTTP_503_SERVICE_UNAVAILABLE, "Event Transport Failure"),
    (SerializationError, status.HTTP_500_INTERNAL_SERVER_ERROR, "Serialization Failure"),
    (UnknownEventTypeError, status.HTTP_500_INTERNAL_SERVER_ERROR, "Unknown Event Type"),
    (ExecutionError, status.HTTP_500_INTERNAL_SERVER_ERROR, "Execution Failure"),
]


def status_for(exc: VFSError) -> tuple[int, str]:
    """Return the HTTP status code and error title for a filesystem error."""
    for error_class, status_code, title in _VFS_ERROR_STATUS:
        if isinstance(exc, error_class):
            return status_code, title
    return status.HTTP_400_BAD_REQUEST, "Filesystem Error"


async def vfs_error_handler(request: Request, exc: VFSError):
    """Handle VFSError exceptions.

    Args:
        request: The incoming request that triggered the error.
        exc: The filesystem error.

    Returns:
        JSONResponse with the mapped status code and error details.
    """
    status_code, title = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")

    content = {
        "error": title,
        "detail": str(exc),
        "type": type(exc).__name__,
    }
    if exc.path is not None:
        content["path"] = exc.path
    return JSONResponse(status_code=status_code, content=content)


async def execution_disabled_handler(request: Request, exc: ExecutionDisabledError):
    """Handle ExecutionDisabledError exceptions.

    Returns a 403 explaining how to enable execution.
    """
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content={
            "error": "Execution Disabled",
            "detail": exc.message,
            "suggestion": "Set VFS_ALLOW_EXEC=true to enable POST /fs/exec",
        },
    )


async def validation_exception_handler(request: Request, exc: ValidationError):
    """Handle Pydantic validation errors raised outside request parsing."""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Validation Error",
            "detail": "The request data failed validation",
            "validation_errors": exc.errors(include_url=False, include_context=False),
        },
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """Handle any unhandled exceptions.

    Logs the traceback and returns a generic message so internals are not
    exposed to clients.
    """
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal Server Error",
            "detail": "An unexpected error occurred",
            "type": type(exc).__name__,
        },
    )
