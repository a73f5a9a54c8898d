"""Internal HTTP handling utilities for the filesystem client.

This module provides the low-level HTTP communication layer used by all
sub-clients. It handles:
- Making HTTP requests
- Response parsing and error mapping
- Retry logic with exponential backoff

This is an internal module and should not be imported directly by users.
"""

import time
from typing import Any, Literal

import httpx

from client.exceptions import (
    APIError,
    BadRequestError,
    ConflictError,
    ConnectionError,
    ForbiddenError,
    NotFoundError,
    ServerError,
    TimeoutError,
    ValidationError,
)


HttpMethod = Literal["GET", "POST"]

# Status codes that trigger automatic retry (when retry is enabled)
RETRYABLE_STATUS_CODES = {502, 503, 504}

# Methods whose requests may be re-sent after the server has seen them.
# A POST is only retried when it never reached the server.
IDEMPOTENT_METHODS = frozenset({"GET"})

DEFAULT_RETRY_BACKOFF_BASE = 0.5  # seconds
DEFAULT_RETRY_BACKOFF_MAX = 30.0  # seconds

_STATUS_ERRORS: dict[int, type[APIError]] = {
    400: BadRequestError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
}


def _parse_error_response(response: httpx.Response) -> dict[str, Any]:
    """Extract message, type, path and details from an error response.

    Understands the server's ``{"error", "detail", "type", "path"}`` bodies
    as well as FastAPI's default ``{"detail": [...]}`` validation errors.
    Falls back to the raw response text when the body is not JSON.

    Args:
        response: The HTTP response to parse.

    Returns:
        Keyword arguments for the APIError constructor, plus "message".
    """
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return {"message": text or f"HTTP {response.status_code} error"}

    if not isinstance(body, dict):
        return {"message": str(body)}

    detail = body.get("detail")
    if isinstance(detail, list):
        # Request validation errors come as a list
        messages = [
            f"{err.get('loc', ['unknown'])[-1]}: {err.get('msg', 'invalid')}"
            for err in detail
        ]
        return {"message": "; ".join(messages), "details": {"errors": detail}}

    if "validation_errors" in body:
        return {
            "message": detail or body.get("error", "Validation failed"),
            "details": {"errors": body["validation_errors"]},
        }

    message = detail if isinstance(detail, str) else body.get("error", str(body))
    parsed: dict[str, Any] = {
        "message": message,
        "error_type": body.get("type"),
        "path": body.get("path"),
    }
    if "suggestion" in body:
        parsed["details"] = {"suggestion": body["suggestion"]}
    return parsed


def _raise_for_status(response: httpx.Response) -> None:
    """Raise the client exception matching an error status code.

    Raises:
        BadRequestError: For HTTP 400 responses.
        ForbiddenError: For HTTP 403 responses.
        NotFoundError: For HTTP 404 responses.
        ConflictError: For HTTP 409 responses.
        ValidationError: For HTTP 422 responses.
        ServerError: For HTTP 5xx responses.
        APIError: For other HTTP 4xx responses.
    """
    if response.is_success:
        return

    parsed = _parse_error_response(response)
    message = parsed.pop("message")
    status_code = response.status_code

    try:
        response_body = response.json()
    except ValueError:
        response_body = response.text

    if status_code >= 500:
        raise ServerError(
            message, status_code=status_code, response_body=response_body, **parsed
        )

    error_class = _STATUS_ERRORS.get(status_code)
    if error_class is not None:
        raise error_class(message, response_body=response_body, **parsed)

    raise APIError(
        message, status_code=status_code, response_body=response_body, **parsed
    )


def _calculate_backoff(attempt: int, base: float = DEFAULT_RETRY_BACKOFF_BASE) -> float:
    """Return the delay before retry number ``attempt`` (0-indexed).

    Exponential: base * 2^attempt, capped at DEFAULT_RETRY_BACKOFF_MAX.
    """
    delay = base * (2 ** attempt)
    return min(delay, DEFAULT_RETRY_BACKOFF_MAX)


class HTTPClient:
    """Synchronous HTTP client for making API requests.

    Wraps httpx.Client with error mapping and optional retry.

    Attributes:
        base_url: The base URL for all API requests.
        timeout: Request timeout in seconds.
        retry_enabled: Whether to retry on transient failures.
        max_retries: Maximum number of retry attempts.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: The base URL for all API requests.
            timeout: Request timeout in seconds.
            retry_enabled: Whether to retry on transient failures.
            max_retries: Maximum number of retry attempts.
            transport: Custom transport (e.g., MockTransport for testing).
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_enabled = retry_enabled
        self.max_retries = max_retries

        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        self._client.close()

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def request(
        self,
        method: HttpMethod,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Make an HTTP request and return the parsed JSON response.

        Connection failures are retried for every method. Retryable status
        codes and read timeouts are retried for GET only: a POST that reached
        the server may already have been applied.

        Args:
            method: The HTTP method.
            path: The URL path (appended to base_url).
            params: Query parameters; None values are dropped.
            json: JSON body to send with the request.

        Returns:
            The parsed JSON response body, or None for empty responses.

        Raises:
            ConnectionError: If the connection fails.
            TimeoutError: If the request times out.
            APIError: If the server returns an error response.
        """
        url = f"{self.base_url}{path}"

        if params:
            params = {k: v for k, v in params.items() if v is not None}

        attempts = self.max_retries + 1 if self.retry_enabled else 1

        for attempt in range(attempts):
            is_last = attempt >= attempts - 1
            try:
                response = self._client.request(
                    method=method,
                    url=path,
                    params=params,
                    json=json,
                )
            except httpx.ConnectError as e:
                if is_last:
                    raise ConnectionError(
                        f"Failed to connect to {url}", url=url, cause=e
                    ) from e
                time.sleep(_calculate_backoff(attempt))
                continue
            except httpx.TimeoutException as e:
                resendable = method in IDEMPOTENT_METHODS or isinstance(
                    e, httpx.ConnectTimeout
                )
                if is_last or not resendable:
                    raise TimeoutError(
                        f"Request to {url} timed out", timeout=self.timeout, url=url
                    ) from e
                time.sleep(_calculate_backoff(attempt))
                continue

            if (
                response.status_code in RETRYABLE_STATUS_CODES
                and method in IDEMPOTENT_METHODS
                and not is_last
            ):
                time.sleep(_calculate_backoff(attempt))
                continue

            _raise_for_status(response)

            if response.content:
                return response.json()
            return None

        raise RuntimeError("Unexpected error in request retry loop")

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Make a GET request."""
        return self.request("GET", path, params=params)

    def post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make a POST request."""
        return self.request("POST", path, params=params, json=json)
