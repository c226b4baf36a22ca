"""Apollo Lead Downloader: search Apollo contacts and export them as leads."""
