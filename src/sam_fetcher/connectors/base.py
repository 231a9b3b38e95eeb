"""Abstract base class for paginated source connectors."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from sam_fetcher.models.fetch import FetchMeta, FetchRequest, FetchResult
from sam_fetcher.models.opportunity import NormalizedOpportunity
from sam_fetcher.models.raw import RawOpportunity

logger = logging.getLogger(__name__)


class BaseConnector(ABC):
    """
    Standard interface for offset-paginated opportunity sources.
    Subclasses implement one page request and per-record normalization;
    fetch_all drives pagination across categories.
    """

    source_id: str = ""

    @abstractmethod
    def search_page(
        self,
        request: FetchRequest,
        set_aside: str,
        offset: int,
        api_key: Optional[str] = None,
    ) -> list[RawOpportunity]:
        """
        Fetch one page of raw results for a category starting at offset.
        """
        pass

    @abstractmethod
    def normalize(self, raw: RawOpportunity) -> Optional[NormalizedOpportunity]:
        """
        Convert raw record to NormalizedOpportunity; None when it must be dropped.
        """
        pass

    def normalize_many(self, raw_list: list[RawOpportunity]) -> list[NormalizedOpportunity]:
        """Normalize a page, keeping only records with an identifier."""
        normalized = (self.normalize(r) for r in raw_list)
        return [o for o in normalized if o is not None and o.notice_id]

    def fetch_all(self, request: FetchRequest, api_key: Optional[str] = None) -> FetchResult:
        """
        Fetch every page of every requested category, in order.
        A category ends on the first page shorter than request.limit.
        Any error aborts the whole run; no partial result is returned.
        """
        items: list[NormalizedOpportunity] = []
        pages = 0

        for set_aside in request.set_asides:
            offset = 0
            category_count = 0
            while True:
                raw_list = self.search_page(request, set_aside, offset, api_key=api_key)
                kept = self.normalize_many(raw_list)
                items.extend(kept)
                category_count += len(kept)
                pages += 1
                logger.debug(
                    "%s: set-aside %s offset %d returned %d results (%d kept)",
                    self.source_id,
                    set_aside,
                    offset,
                    len(raw_list),
                    len(kept),
                )
                if len(raw_list) < request.limit:
                    break
                offset += request.limit
            logger.info("%s: set-aside %s yielded %d opportunities", self.source_id, set_aside, category_count)

        logger.info("%s: fetched %d opportunities in %d pages", self.source_id, len(items), pages)
        return FetchResult(
            meta=FetchMeta(
                posted_from=request.posted_from,
                posted_to=request.posted_to,
                set_asides=list(request.set_asides),
                fetched=len(items),
                pages=pages,
            ),
            items=items,
        )
