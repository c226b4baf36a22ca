"""Paginated retrieval-and-normalization loop."""

from .models import RetrievalResult, StopReason
from .runner import LeadRetriever

__all__ = ["LeadRetriever", "RetrievalResult", "StopReason"]
