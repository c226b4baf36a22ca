"""Test suite for the Apollo Lead Downloader."""
