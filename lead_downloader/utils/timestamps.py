"""Timestamp utilities for UTC handling.

This module provides utilities for working with timestamps in UTC:
- Getting current UTC time
- Converting timezone-naive to timezone-aware UTC
- Converting timestamps to epoch milliseconds for filenames
"""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Current UTC time with timezone info

    Example:
        >>> now = utc_now()
        >>> now.tzinfo == timezone.utc
        True
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Ensure a datetime is timezone-aware and in UTC.

    If the datetime is timezone-naive, it's treated as UTC.
    If the datetime has a different timezone, it's converted to UTC.

    Args:
        dt: Datetime to convert (can be None)

    Returns:
        Timezone-aware datetime in UTC, or None if input is None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def timestamp_to_unix_millis(dt: datetime) -> int:
    """Convert datetime to milliseconds since the Unix epoch.

    Naive datetimes are treated as UTC.

    Example:
        >>> timestamp_to_unix_millis(datetime(2025, 1, 1, tzinfo=timezone.utc))
        1735689600000
    """
    dt_utc = ensure_utc(dt)
    if dt_utc is None:
        return 0
    return int(dt_utc.timestamp() * 1000)
