"""Custom exceptions for the upstream contact-search client."""

from typing import Any, Optional


class UpstreamError(Exception):
    """Base exception for all upstream errors.

    Catching this exception catches any failure of an upstream call. A
    retrieval aborts on the first one; nothing is retried.

    Attributes:
        detail: Upstream-provided error detail (parsed JSON body or text), if any
    """

    def __init__(self, message: str, detail: Optional[Any] = None) -> None:
        super().__init__(message)
        self.detail = detail


class UpstreamHTTPError(UpstreamError):
    """HTTP request failed with a 4xx/5xx status or could not connect.

    A status_code of 0 means no response was received at all.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        url: str,
        detail: Optional[Any] = None,
    ) -> None:
        """Initialize HTTP error with status code and URL.

        Args:
            message: Human-readable error message
            status_code: HTTP status code (e.g., 401, 500), or 0 on connection failure
            url: URL that failed
            detail: Upstream response body, parsed as JSON when possible
        """
        super().__init__(message, detail=detail)
        self.status_code = status_code
        self.url = url


class UpstreamTimeoutError(UpstreamError):
    """HTTP request did not complete within the configured timeout."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class UpstreamResponseError(UpstreamError):
    """Response parsing or validation failed.

    Indicates the client received a response but its payload was malformed
    (invalid JSON, not an object, contacts not a list).
    """

    pass


class UpstreamConfigurationError(UpstreamError):
    """Invalid client configuration (e.g., missing API key, bad timeout)."""

    pass
