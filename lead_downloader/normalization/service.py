"""Lead normalization service for converting raw upstream contacts to Leads.

Upstream contact records are inconsistent across API versions in how they
name equivalent fields. Each output field therefore resolves against an
ordered list of candidate paths into the raw record: the first value that
is present and truthy wins, otherwise the field is an empty string.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Optional, Union

from lead_downloader.domain.models import LEAD_FIELDS, Lead
from lead_downloader.logging import get_logger

logger = get_logger(__name__, component="normalization")

# A path step is a mapping key or a list index
PathStep = Union[str, int]
FieldPath = tuple[PathStep, ...]

FIELD_CANDIDATES: dict[str, tuple[FieldPath, ...]] = {
    "first_name": (("first_name",),),
    "last_name": (("last_name",),),
    "title": (("title",),),
    "company_name": (("organization", "name"), ("company_name",)),
    "city": (("city",),),
    "state": (("state",),),
    "country": (("country",),),
    "email": (("email",), ("emails", 0)),
    "phone": (("phone_numbers", 0, "raw_number"), ("phone_numbers", 0, "number")),
    "linkedin_url": (("linkedin_url",), ("linkedIn_url",), ("linkedin", "url")),
    "company_website": (("organization", "website_url"),),
}


def lookup_path(raw: Any, path: FieldPath) -> Any:
    """Follow a path of keys and indexes into a loosely-typed record.

    Returns None as soon as a step cannot be taken: missing key, index out
    of range, or a value of the wrong shape along the way.
    """
    current = raw
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, Sequence) or isinstance(current, (str, bytes)):
                return None
            if step >= len(current):
                return None
            current = current[step]
        else:
            if not isinstance(current, Mapping):
                return None
            current = current.get(step)
        if current is None:
            return None
    return current


def resolve_field(raw: Any, candidates: Iterable[FieldPath]) -> str:
    """Resolve one output field from its ordered candidate paths.

    Only strings and numbers count as values; objects, lists and booleans
    found at a candidate path are skipped so their reprs never reach a Lead.
    """
    for path in candidates:
        value = lookup_path(raw, path)
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            continue
        if value:
            return value if isinstance(value, str) else str(value)
    return ""



class LeadNormalizer:
    """Normalizes raw upstream contacts into Lead domain models.

    normalize() is total: it never raises, whatever shape the raw record
    has. Records that are not mappings yield a Lead of empty strings.
    """

    def __init__(self, logger_instance: Optional[logging.Logger] = None):
        """Initialize LeadNormalizer.

        Args:
            logger_instance: Logger instance (defaults to module logger)
        """
        self.logger = logger_instance or logger

    def normalize(self, raw: Any) -> Lead:
        """Normalize a single raw contact into a Lead.

        Args:
            raw: Raw contact record from upstream (usually a dict)

        Returns:
            Lead with every field resolved or empty
        """
        if not isinstance(raw, Mapping):
            self.logger.debug(
                "Raw contact is not an object",
                extra={
                    "event": "normalization.contact.unrecognized",
                    "raw_type": type(raw).__name__,
                },
            )
            return Lead()

        values = {name: resolve_field(raw, FIELD_CANDIDATES[name]) for name in LEAD_FIELDS}
        return Lead(**values)
