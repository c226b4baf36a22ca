"""Unit tests for the paginated retrieval loop.

Tests LeadRetriever for:
- Termination on target count, empty page and short page
- Per-record early stop on an over-full page
- Page advancement and request parameters
- Abort-on-first-failure with no partial results
"""

import logging
from unittest.mock import Mock, call

import pytest

from lead_downloader.domain.models import QueryValidationError, SearchQuery
from lead_downloader.normalization.service import LeadNormalizer
from lead_downloader.retrieval import LeadRetriever, StopReason
from lead_downloader.upstream.exceptions import UpstreamHTTPError, UpstreamTimeoutError

from tests.helpers import make_page


@pytest.fixture
def retriever(mock_client):
    return LeadRetriever(mock_client)


def query(target_count=100, page_size=50, keywords="designer", location=None):
    return SearchQuery(
        keywords=keywords,
        location=location,
        target_count=target_count,
        page_size=page_size,
    )


class TestTermination:
    """Tests for the three termination signals."""

    def test_full_pages_return_exactly_target(self, retriever, mock_client):
        """Full pages until the target is met yield exactly target_count leads."""
        mock_client.search_contacts.side_effect = [make_page(50, 0), make_page(50, 50)]

        result = retriever.run(query(target_count=100, page_size=50))

        assert result.lead_count == 100
        assert result.pages_fetched == 2
        assert result.stop_reason == StopReason.TARGET_REACHED
        assert mock_client.search_contacts.call_count == 2

    def test_designer_scenario_three_calls(self, retriever, mock_client):
        """Pages of 50, 50, 20 for a target of 120 yield 120 leads in 3 calls."""
        mock_client.search_contacts.side_effect = [
            make_page(50, 0),
            make_page(50, 50),
            make_page(20, 100),
        ]

        leads = retriever.fetch_leads(query(target_count=120, page_size=50))

        assert len(leads) == 120
        assert mock_client.search_contacts.call_count == 3
        assert leads[0].first_name == "First0"
        assert leads[-1].first_name == "First119"

    def test_empty_page_stops_immediately(self, retriever, mock_client):
        """An empty page returns prior leads and requests nothing further."""
        mock_client.search_contacts.side_effect = [make_page(10, 0), []]

        result = retriever.run(query(target_count=100, page_size=10))

        assert result.lead_count == 10
        assert result.stop_reason == StopReason.EMPTY_PAGE
        assert mock_client.search_contacts.call_count == 2

    def test_empty_first_page_returns_empty_result(self, retriever, mock_client):
        mock_client.search_contacts.return_value = []

        assert retriever.fetch_leads(query()) == []
        assert mock_client.search_contacts.call_count == 1

    def test_none_page_treated_as_empty(self, retriever, mock_client):
        mock_client.search_contacts.return_value = None

        result = retriever.run(query())

        assert result.leads == []
        assert result.stop_reason == StopReason.EMPTY_PAGE

    def test_short_page_stops_before_target(self, retriever, mock_client):
        """A page smaller than page_size ends the loop after processing it."""
        mock_client.search_contacts.side_effect = [make_page(50, 0), make_page(30, 50)]

        result = retriever.run(query(target_count=500, page_size=50))

        assert result.lead_count == 80
        assert result.stop_reason == StopReason.SHORT_PAGE
        assert mock_client.search_contacts.call_count == 2

    def test_completion_event_reports_counts(self, retriever, mock_client, caplog):
        """The summary event carries pages, contacts seen and the stop reason."""
        mock_client.search_contacts.side_effect = [make_page(5, 0), make_page(3, 5)]
        caplog.set_level(logging.INFO, logger="lead_downloader.retrieval.runner")

        result = retriever.run(query(target_count=6, page_size=5))

        completed = [r for r in caplog.records if getattr(r, "event", None) == "retrieval.completed"]
        assert len(completed) == 1
        record = completed[0]
        assert record.lead_count == 6
        assert record.pages_fetched == 2
        assert record.contacts_seen == 8
        assert record.stop_reason == "short_page"
        assert result.contacts_seen == 8


class TestPaging:
    """Tests for page advancement and early stop."""

    def test_over_full_page_is_truncated(self, retriever, mock_client):
        """Records past the target are neither normalized nor appended."""
        normalizer = Mock(wraps=LeadNormalizer())
        retriever = LeadRetriever(mock_client, normalizer)
        mock_client.search_contacts.return_value = make_page(50)

        leads = retriever.fetch_leads(query(target_count=7, page_size=50))

        assert len(leads) == 7
        assert normalizer.normalize.call_count == 7
        assert mock_client.search_contacts.call_count == 1

    def test_pages_requested_sequentially(self, retriever, mock_client):
        mock_client.search_contacts.side_effect = [make_page(2, 0), make_page(2, 2), make_page(1, 4)]

        retriever.fetch_leads(query(target_count=10, page_size=2, location="Pune"))

        assert mock_client.search_contacts.call_args_list == [
            call("designer", "Pune", page=1, per_page=2),
            call("designer", "Pune", page=2, per_page=2),
            call("designer", "Pune", page=3, per_page=2),
        ]

    def test_duplicates_across_pages_are_kept(self, retriever, mock_client):
        """Leads are not deduplicated across pages."""
        page = make_page(5)
        mock_client.search_contacts.side_effect = [page, page]

        leads = retriever.fetch_leads(query(target_count=10, page_size=5))

        assert len(leads) == 10
        assert leads[0] == leads[5]

    def test_malformed_contacts_still_count(self, retriever, mock_client):
        """Unrecognizable records become empty leads rather than errors."""
        mock_client.search_contacts.return_value = [None, {"first_name": "Ada"}]

        leads = retriever.fetch_leads(query(target_count=10, page_size=5))

        assert [lead.first_name for lead in leads] == ["", "Ada"]


class TestFailures:
    """Tests for validation and upstream failures."""

    def test_missing_keywords_makes_no_calls(self, retriever, mock_client):
        blank = SearchQuery.model_construct(keywords="", location=None, target_count=10, page_size=5)

        with pytest.raises(QueryValidationError):
            retriever.fetch_leads(blank)

        mock_client.search_contacts.assert_not_called()

    def test_upstream_error_aborts_without_partial_results(self, retriever, mock_client):
        """A failure on a later page discards earlier pages."""
        mock_client.search_contacts.side_effect = [
            make_page(5),
            UpstreamHTTPError("HTTP 500", status_code=500, url="u"),
        ]

        with pytest.raises(UpstreamHTTPError):
            retriever.fetch_leads(query(target_count=20, page_size=5))

        assert mock_client.search_contacts.call_count == 2

    def test_timeout_is_not_retried(self, retriever, mock_client):
        mock_client.search_contacts.side_effect = UpstreamTimeoutError("timed out", url="u")

        with pytest.raises(UpstreamTimeoutError):
            retriever.fetch_leads(query())

        assert mock_client.search_contacts.call_count == 1
