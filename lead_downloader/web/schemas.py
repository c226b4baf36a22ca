"""Request and response schemas for the web API."""

from typing import Any, List, Optional

from pydantic import BaseModel, Field

from lead_downloader.domain.models import Lead


class SearchRequest(BaseModel):
    """Body of POST /search, sent as JSON or form-encoded.

    Fields are loosely typed: the page sends numbers, scripts often send
    strings, and SearchQuery.from_params validates and clamps whatever
    arrives.
    """

    keywords: Optional[Any] = None
    location: Optional[Any] = None
    limit: Optional[Any] = None
    per_page: Optional[Any] = Field(None, alias="perPage")

    model_config = {"populate_by_name": True, "extra": "ignore"}


class SearchResponse(BaseModel):
    results: List[Lead]


class ErrorResponse(BaseModel):
    error: str
    details: Optional[Any] = None
