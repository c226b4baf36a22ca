"""Apollo contact-search client implementation."""

from typing import Any, Optional

from lead_downloader.logging import get_logger

from .base import BaseUpstreamClient
from .exceptions import UpstreamConfigurationError, UpstreamResponseError

logger = get_logger(__name__, component="upstream")


class ApolloClient(BaseUpstreamClient):
    """Client for the Apollo contacts search API.

    Each call fetches a single page of contacts. Paging decisions belong to
    the caller (see lead_downloader.retrieval).

    API Details:
        Endpoint: https://api.apollo.io/v1/contacts/search
        Method: POST
        Authentication: X-Api-Key header
        Response: JSON object with an optional 'contacts' array
    """

    CLIENT_NAME = "apollo"
    DEFAULT_ENDPOINT = "https://api.apollo.io/v1/contacts/search"

    def __init__(
        self,
        api_key: str,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: int = 30,
        user_agent: str = "ApolloLeadDownloader/1.0",
    ) -> None:
        """Initialize the Apollo client.

        Args:
            api_key: Static Apollo API key forwarded on every request
            endpoint: Search endpoint URL
            timeout: HTTP request timeout in seconds
            user_agent: User-Agent header for requests

        Raises:
            UpstreamConfigurationError: If api_key or endpoint is empty, or timeout is invalid
        """
        super().__init__(timeout=timeout, user_agent=user_agent)

        if not api_key or not api_key.strip():
            raise UpstreamConfigurationError("Apollo API key cannot be empty")
        if not endpoint or not endpoint.strip():
            raise UpstreamConfigurationError("Apollo endpoint cannot be empty")

        self.endpoint = endpoint.strip()
        self._default_headers["X-Api-Key"] = api_key.strip()

    @staticmethod
    def build_payload(
        keywords: str,
        location: Optional[str],
        page: int,
        per_page: int,
    ) -> dict[str, Any]:
        """Build the search request body.

        The location filter is sent as a single-element list, and omitted
        entirely when no location is given.
        """
        payload: dict[str, Any] = {
            "q_keywords": keywords,
            "page": page,
            "per_page": per_page,
        }
        if location:
            payload["person_locations"] = [location]
        return payload

    def search_contacts(
        self,
        keywords: str,
        location: Optional[str],
        page: int,
        per_page: int,
    ) -> list[Any]:
        """Fetch one page of raw contacts.

        Args:
            keywords: Keyword query
            location: Optional location filter
            page: 1-based page number
            per_page: Requested page size

        Returns:
            List of raw contact records; empty when the response has no contacts

        Raises:
            UpstreamHTTPError: On HTTP or connection failure
            UpstreamTimeoutError: On timeout
            UpstreamResponseError: On a malformed payload
        """
        payload = self.build_payload(keywords, location, page, per_page)

        logger.debug(
            "Searching Apollo contacts",
            extra={
                "event": "upstream.search.request",
                "client": self.CLIENT_NAME,
                "page": page,
                "per_page": per_page,
                "has_location": bool(location),
            },
        )

        response = self._make_request(self.endpoint, method="POST", json_data=payload)

        if not isinstance(response, dict):
            raise UpstreamResponseError(
                f"Expected JSON object response, got {type(response).__name__}",
                detail=response,
            )

        contacts = response.get("contacts")
        if contacts is None:
            return []
        if not isinstance(contacts, list):
            raise UpstreamResponseError(
                f"Expected 'contacts' field to be array, got {type(contacts).__name__}"
            )

        return contacts
