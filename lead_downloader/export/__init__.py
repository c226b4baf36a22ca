"""Export formats for lead result sets."""

from .csv_writer import build_download_filename, leads_to_csv

__all__ = ["leads_to_csv", "build_download_filename"]
