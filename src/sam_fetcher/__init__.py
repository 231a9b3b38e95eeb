"""Bulk SAM.gov opportunity fetcher: paginated, retrying fetch-and-normalize."""

__version__ = "0.1.0"
