"""Normalization layer mapping raw upstream contacts to Leads.

This module provides:
- LeadNormalizer: Service to convert raw contact dicts to Lead models
- FIELD_CANDIDATES: Ordered candidate source paths per output field
- resolve_field / lookup_path: Fallback field resolution helpers
"""

from .service import FIELD_CANDIDATES, LeadNormalizer, lookup_path, resolve_field

__all__ = [
    "LeadNormalizer",
    "FIELD_CANDIDATES",
    "lookup_path",
    "resolve_field",
]
