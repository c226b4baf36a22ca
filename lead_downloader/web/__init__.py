"""Web surface: JSON search, CSV download and the search page."""

from .app import create_app

__all__ = ["create_app"]
