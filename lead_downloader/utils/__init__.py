"""Utility modules for the Apollo Lead Downloader."""

from .timestamps import ensure_utc, timestamp_to_unix_millis, utc_now

__all__ = [
    "utc_now",
    "ensure_utc",
    "timestamp_to_unix_millis",
]
