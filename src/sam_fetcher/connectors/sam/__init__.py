"""SAM.gov Opportunities API connector."""

from sam_fetcher.connectors.sam.connector import SamConnector, UpstreamRejectedError

__all__ = ["SamConnector", "UpstreamRejectedError"]
