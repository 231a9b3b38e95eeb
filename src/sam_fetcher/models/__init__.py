"""Data models for raw and normalized opportunities and fetch runs."""

from sam_fetcher.models.fetch import FetchMeta, FetchRequest, FetchResult
from sam_fetcher.models.opportunity import DESCRIPTIVE_FIELDS, NormalizedOpportunity
from sam_fetcher.models.raw import RawOpportunity

__all__ = [
    "DESCRIPTIVE_FIELDS",
    "FetchMeta",
    "FetchRequest",
    "FetchResult",
    "NormalizedOpportunity",
    "RawOpportunity",
]
