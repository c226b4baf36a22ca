"""Upstream contact-search API clients.

Use the Apollo client directly:
    from lead_downloader.upstream import ApolloClient
    client = ApolloClient(api_key="...")
    contacts = client.search_contacts("designer", None, page=1, per_page=50)

Exception handling:
    from lead_downloader.upstream import UpstreamError, UpstreamHTTPError, UpstreamTimeoutError
"""

from .apollo import ApolloClient
from .base import BaseUpstreamClient
from .exceptions import (
    UpstreamConfigurationError,
    UpstreamError,
    UpstreamHTTPError,
    UpstreamResponseError,
    UpstreamTimeoutError,
)

__all__ = [
    "BaseUpstreamClient",
    "ApolloClient",
    # Exceptions
    "UpstreamError",
    "UpstreamHTTPError",
    "UpstreamTimeoutError",
    "UpstreamResponseError",
    "UpstreamConfigurationError",
]
