"""Core domain models for search queries and leads.

This module defines the data structures used throughout the application:
- SearchQuery: validated search parameters with clamped counts
- Lead: normalized contact record with a fixed eleven-field schema
- QueryValidationError: raised when required query input is missing
"""

import sys
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_TARGET_COUNT = 100
MAX_TARGET_COUNT = 1000
DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 200

# Column order for every Lead export
LEAD_FIELDS = (
    "first_name",
    "last_name",
    "title",
    "company_name",
    "city",
    "state",
    "country",
    "email",
    "phone",
    "linkedin_url",
    "company_website",
)


class QueryValidationError(ValueError):
    """Missing or invalid required search input.

    Raised before any upstream call is made. The web layer surfaces this
    as a client error with the message as explanation.
    """

    pass


def _clamp(value: int, maximum: int) -> int:
    return max(1, min(value, maximum))


def _coerce_count(value: Any, default: int) -> int:
    """Parse a loosely-typed count, falling back to default when unusable.

    Missing, non-numeric and zero values all resolve to the default. Values
    too large to represent (``"1e999"``) keep their sign so clamping pins them
    to the nearest bound.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value) if isinstance(value, str) else value
        parsed = int(number)
    except OverflowError:
        return sys.maxsize if number > 0 else -sys.maxsize
    except (TypeError, ValueError):
        return default
    return parsed or default



class SearchQuery(BaseModel):
    """Validated parameters for one lead retrieval.

    target_count and page_size are always clamped into [1, max] so that
    downstream code never needs to re-check them.
    """

    keywords: str = Field(..., description="Free-text keyword query")
    location: Optional[str] = Field(None, description="Optional single location filter")
    target_count: int = Field(DEFAULT_TARGET_COUNT, description="Maximum leads to return")
    page_size: int = Field(DEFAULT_PAGE_SIZE, description="Contacts requested per upstream page")

    @field_validator("keywords")
    @classmethod
    def strip_keywords(cls, v: str) -> str:
        """Strip whitespace from keywords."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("keywords cannot be empty or whitespace-only")
        return stripped

    @field_validator("location")
    @classmethod
    def strip_location(cls, v: Optional[str]) -> Optional[str]:
        """Strip whitespace from location field."""
        if v is None:
            return None
        stripped = v.strip()
        return stripped if stripped else None

    @field_validator("target_count")
    @classmethod
    def clamp_target_count(cls, v: int) -> int:
        return _clamp(v, MAX_TARGET_COUNT)

    @field_validator("page_size")
    @classmethod
    def clamp_page_size(cls, v: int) -> int:
        return _clamp(v, MAX_PAGE_SIZE)

    @classmethod
    def from_params(
        cls,
        keywords: Any,
        location: Any = None,
        limit: Any = None,
        per_page: Any = None,
    ) -> "SearchQuery":
        """Build a query from raw request values.

        Args:
            keywords: Keyword string (required)
            location: Optional location string
            limit: Target count as int or numeric string
            per_page: Page size as int or numeric string

        Returns:
            SearchQuery with counts defaulted and clamped

        Raises:
            QueryValidationError: If keywords is missing or blank
        """
        if not isinstance(keywords, str) or not keywords.strip():
            raise QueryValidationError("keywords is required")

        return cls(
            keywords=keywords,
            location=location if isinstance(location, str) else None,
            target_count=_coerce_count(limit, DEFAULT_TARGET_COUNT),
            page_size=_coerce_count(per_page, DEFAULT_PAGE_SIZE),
        )

    model_config = {"json_schema_extra": {"example": {
        "keywords": "web designer",
        "location": "Mumbai, India",
        "target_count": 100,
        "page_size": 50,
    }}}


class Lead(BaseModel):
    """Normalized contact record.

    Every field is always present and always a string. Missing upstream
    data resolves to an empty string, never to None.
    """

    first_name: str = ""
    last_name: str = ""
    title: str = ""
    company_name: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    email: str = ""
    phone: str = ""
    linkedin_url: str = ""
    company_website: str = ""

    def as_row(self) -> list[str]:
        """Return field values in LEAD_FIELDS order."""
        return [getattr(self, name) for name in LEAD_FIELDS]

    model_config = {"json_schema_extra": {"example": {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "title": "Senior Designer",
        "company_name": "Acme, Inc.",
        "city": "Mumbai",
        "state": "Maharashtra",
        "country": "India",
        "email": "ada@acme.example",
        "phone": "+91 22 5555 0100",
        "linkedin_url": "https://www.linkedin.com/in/ada",
        "company_website": "https://acme.example",
    }}}
