"""Source connectors for opportunity ingestion."""

from sam_fetcher.connectors.base import BaseConnector
from sam_fetcher.connectors.sam import SamConnector, UpstreamRejectedError

__all__ = ["BaseConnector", "SamConnector", "UpstreamRejectedError"]
