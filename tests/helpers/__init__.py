"""Test helper utilities for Apollo Lead Downloader tests."""

from .contacts import make_contact, make_page

__all__ = ["make_contact", "make_page"]
