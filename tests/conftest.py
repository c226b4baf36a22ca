"""Shared fixtures for Apollo Lead Downloader tests."""

from unittest.mock import Mock

import pytest

from lead_downloader.logging.context import clear_log_context
from lead_downloader.upstream.apollo import ApolloClient


@pytest.fixture(autouse=True)
def clean_log_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def mock_client():
    """ApolloClient double whose pages are set per test via side_effect."""
    return Mock(spec=ApolloClient)


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Set the minimal valid environment."""
    monkeypatch.setenv("APOLLO_API_KEY", "test-api-key")
    for name in ("HOST", "PORT", "LOG_LEVEL", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)
