"""Domain models for the Apollo Lead Downloader."""

from .models import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_TARGET_COUNT,
    LEAD_FIELDS,
    MAX_PAGE_SIZE,
    MAX_TARGET_COUNT,
    Lead,
    QueryValidationError,
    SearchQuery,
)

__all__ = [
    "Lead",
    "SearchQuery",
    "QueryValidationError",
    "LEAD_FIELDS",
    "DEFAULT_TARGET_COUNT",
    "MAX_TARGET_COUNT",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
]
