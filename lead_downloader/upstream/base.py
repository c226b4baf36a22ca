"""Base upstream client with shared HTTP request handling.

This module provides the base class for contact-search clients: session
setup, timeout enforcement, and translation of transport failures into the
UpstreamError hierarchy.
"""

import logging
import threading
from typing import Any, Dict, List, Optional

import requests

from lead_downloader.logging import get_logger

from .exceptions import (
    UpstreamConfigurationError,
    UpstreamHTTPError,
    UpstreamResponseError,
    UpstreamTimeoutError,
)

logger = get_logger(__name__, component="upstream")


class BaseUpstreamClient:
    """Base class for upstream API clients.

    Provides shared HTTP request handling and error management. Subclasses
    build on _make_request() to implement their API-specific calls.

    One client is shared by every web worker thread. requests.Session is not
    documented as thread-safe, so each thread gets its own session, built
    from the client's default headers on first use.

    Attributes:
        timeout: HTTP request timeout in seconds
        user_agent: User-Agent header for HTTP requests
    """

    def __init__(self, timeout: int = 30, user_agent: str = "ApolloLeadDownloader/1.0") -> None:
        """Initialize client with configuration.

        Args:
            timeout: HTTP request timeout in seconds (default 30, range 5-300)
            user_agent: User-Agent header for requests

        Raises:
            UpstreamConfigurationError: If timeout is outside valid range or user_agent is empty
        """
        if not 5 <= timeout <= 300:
            raise UpstreamConfigurationError(
                f"Timeout must be between 5 and 300 seconds, got: {timeout}"
            )
        if not user_agent or not user_agent.strip():
            raise UpstreamConfigurationError("user_agent cannot be empty")

        self.timeout = timeout
        self.user_agent = user_agent.strip()

        # Subclasses add their own headers here before the first request
        self._default_headers: Dict[str, str] = {"User-Agent": self.user_agent}
        self._local = threading.local()
        self._sessions: List[requests.Session] = []
        self._sessions_lock = threading.Lock()

    @property
    def _session(self) -> requests.Session:
        """Session owned by the calling thread."""
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers.update(self._default_headers)
            self._local.session = session
            with self._sessions_lock:
                self._sessions.append(session)
        return session

    def close(self) -> None:
        """Release pooled connections held by every thread's session."""
        with self._sessions_lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()
        self._local = threading.local()

    def _make_request(
        self,
        url: str,
        method: str = "GET",
        json_data: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Make HTTP request with error handling.

        Handles:
        - Setting user agent and timeout
        - Connection errors and timeouts
        - HTTP error status codes (with upstream error body as detail)
        - Invalid JSON responses

        Args:
            url: URL to request
            method: HTTP method (default "GET")
            json_data: JSON body for POST requests

        Returns:
            Parsed JSON response

        Raises:
            UpstreamHTTPError: On 4xx or 5xx HTTP status, or connection failure
            UpstreamTimeoutError: On request timeout
            UpstreamResponseError: On invalid JSON
        """
        session = self._session

        try:
            logger.debug(
                f"HTTP {method} request to {url}",
                extra={
                    "event": "upstream.fetch.request",
                    "method": method,
                    "url": url,
                    "timeout": self.timeout,
                },
            )

            response = session.request(
                method=method,
                url=url,
                json=json_data,
                timeout=self.timeout,
            )

            if response.status_code >= 400:
                log_level = logging.WARNING if response.status_code >= 500 else logging.ERROR
                logger.log(
                    log_level,
                    f"HTTP {response.status_code} error from {url}",
                    extra={
                        "event": "upstream.fetch.error",
                        "status_code": response.status_code,
                        "url": url,
                    },
                )

                raise UpstreamHTTPError(
                    f"HTTP {response.status_code}: {response.reason}",
                    status_code=response.status_code,
                    url=url,
                    detail=self._error_detail(response),
                )

            try:
                data = response.json()
                logger.debug(
                    "HTTP request succeeded",
                    extra={
                        "event": "upstream.fetch.succeeded",
                        "status_code": response.status_code,
                        "url": url,
                    },
                )
                return data
            except (ValueError, requests.exceptions.JSONDecodeError) as e:
                logger.error(
                    f"Failed to parse JSON response from {url}",
                    extra={
                        "event": "upstream.fetch.error",
                        "error_type": "JSONDecodeError",
                        "url": url,
                    },
                )
                raise UpstreamResponseError(
                    f"Failed to parse JSON response from {url}: {e}"
                ) from e

        except requests.exceptions.Timeout as e:
            logger.warning(
                f"Request to {url} timed out after {self.timeout} seconds",
                extra={
                    "event": "upstream.fetch.timeout",
                    "error_type": "Timeout",
                    "url": url,
                    "timeout": self.timeout,
                },
            )
            raise UpstreamTimeoutError(
                f"Request to {url} timed out after {self.timeout} seconds",
                url=url,
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(
                f"Request to {url} failed: {e}",
                extra={
                    "event": "upstream.fetch.error",
                    "error_type": type(e).__name__,
                    "url": url,
                },
            )
            raise UpstreamHTTPError(
                f"Request to {url} failed: {e}",
                status_code=0,
                url=url,
                detail=str(e),
            ) from e

    @staticmethod
    def _error_detail(response: requests.Response) -> Any:
        """Extract the upstream-provided error body, preferring JSON."""
        try:
            return response.json()
        except ValueError:
            return response.text or None
