"""Paginated lead retrieval against the upstream contact-search API."""

import time
from typing import Optional
from uuid import uuid4

from lead_downloader.domain.models import Lead, QueryValidationError, SearchQuery
from lead_downloader.logging import get_logger
from lead_downloader.logging.context import log_context
from lead_downloader.normalization.service import LeadNormalizer
from lead_downloader.upstream.apollo import ApolloClient
from lead_downloader.upstream.exceptions import UpstreamError

from .models import RetrievalResult, StopReason

logger = get_logger(__name__, component="retrieval")


class LeadRetriever:
    """
    Drives sequential page fetches until a query's target count is met.

    The retriever holds no per-call state, so one instance can serve
    concurrent requests. Within a call, page N+1 is never requested before
    page N has been processed.
    """

    def __init__(self, client: ApolloClient, normalizer: Optional[LeadNormalizer] = None):
        """
        Initialize the retriever.

        Args:
            client: Upstream client used to fetch each page
            normalizer: Normalizer applied to every raw contact
        """
        self.client = client
        self.normalizer = normalizer or LeadNormalizer()

    def fetch_leads(self, query: SearchQuery) -> list[Lead]:
        """
        Fetch and normalize leads for a query.

        Args:
            query: Validated search query

        Returns:
            Leads in upstream order, at most query.target_count long

        Raises:
            QueryValidationError: If the query has no keywords
            UpstreamError: On the first failed upstream call
        """
        return self.run(query).leads

    def run(self, query: SearchQuery) -> RetrievalResult:
        """
        Execute a retrieval and return the leads with execution metrics.

        The loop stops when the target count is reached, when a page comes
        back empty, or when a page is shorter than the requested page size.

        Args:
            query: Validated search query

        Returns:
            RetrievalResult with leads, page count and stop reason

        Raises:
            QueryValidationError: If the query has no keywords
            UpstreamError: On the first failed upstream call; no partial
                results are returned
        """
        if not query.keywords or not query.keywords.strip():
            raise QueryValidationError("keywords is required")

        started = time.monotonic()
        result = RetrievalResult()
        page = 1

        with log_context(retrieval_id=uuid4().hex):
            logger.info(
                "Retrieval started",
                extra={
                    "event": "retrieval.started",
                    "target_count": query.target_count,
                    "page_size": query.page_size,
                    "has_location": query.location is not None,
                },
            )

            try:
                while len(result.leads) < query.target_count:
                    contacts = self.client.search_contacts(
                        query.keywords,
                        query.location,
                        page=page,
                        per_page=query.page_size,
                    )
                    contacts = contacts or []
                    result.pages_fetched += 1
                    result.contacts_seen += len(contacts)

                    logger.debug(
                        f"Fetched page {page} with {len(contacts)} contacts",
                        extra={
                            "event": "retrieval.page.fetched",
                            "page": page,
                            "contact_count": len(contacts),
                        },
                    )

                    if not contacts:
                        result.stop_reason = StopReason.EMPTY_PAGE
                        break

                    for raw in contacts:
                        result.leads.append(self.normalizer.normalize(raw))
                        if len(result.leads) >= query.target_count:
                            break

                    page += 1

                    if len(contacts) < query.page_size:
                        result.stop_reason = StopReason.SHORT_PAGE
                        break
                else:
                    result.stop_reason = StopReason.TARGET_REACHED

            except UpstreamError as e:
                logger.error(
                    f"Retrieval aborted on page {page}: {e}",
                    extra={
                        "event": "retrieval.failed",
                        "page": page,
                        "error_type": type(e).__name__,
                        "leads_discarded": len(result.leads),
                    },
                )
                raise

            result.duration_seconds = round(time.monotonic() - started, 3)

            logger.info(
                f"Retrieval completed with {result.lead_count} leads",
                extra={
                    "event": "retrieval.completed",
                    "lead_count": result.lead_count,
                    "pages_fetched": result.pages_fetched,
                    "contacts_seen": result.contacts_seen,
                    "stop_reason": result.stop_reason.value,
                    "duration_seconds": result.duration_seconds,
                },
            )

        return result
