"""Data models for retrieval execution tracking and reporting."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from lead_downloader.domain.models import Lead


class StopReason(str, Enum):
    """Why a retrieval loop stopped requesting pages."""

    TARGET_REACHED = "target_reached"
    EMPTY_PAGE = "empty_page"
    SHORT_PAGE = "short_page"


@dataclass
class RetrievalResult:
    """
    Outcome of one paginated retrieval.

    Attributes:
        leads: Accumulated leads, in upstream order, at most target_count long
        pages_fetched: Number of upstream calls made
        contacts_seen: Raw contacts returned across all pages
        stop_reason: Termination signal that ended the loop
        duration_seconds: Wall-clock time for the whole retrieval
    """

    leads: List[Lead] = field(default_factory=list)
    pages_fetched: int = 0
    contacts_seen: int = 0
    stop_reason: StopReason = StopReason.TARGET_REACHED
    duration_seconds: float = 0.0

    @property
    def lead_count(self) -> int:
        return len(self.leads)
