"""SAM.gov Opportunities API connector.

Pulls active notices from the public search endpoint
(https://api.sam.gov/opportunities/v2/search), one GET per
(set-aside, offset) page. Each page request is retried on 429, 5xx and
transport errors with jittered exponential backoff; any other 4xx aborts
the whole fetch.
"""

import logging
import os
from typing import Any, Optional

import httpx

from sam_fetcher.connectors.base import BaseConnector
from sam_fetcher.models.fetch import FetchRequest
from sam_fetcher.models.opportunity import NormalizedOpportunity
from sam_fetcher.models.raw import RawOpportunity
from sam_fetcher.retry import (
    MAX_ATTEMPTS,
    RetryableStatusError,
    is_retryable_status,
    retry_call,
)

from .constants import ERROR_BODY_LIMIT, SEARCH_URL, STATUS_ACTIVE
from .parsers import extract_results, normalize_record

logger = logging.getLogger(__name__)


class UpstreamRejectedError(RuntimeError):
    """SAM.gov rejected the request with a non-retryable status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"SAM.gov request failed {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class SamConnector(BaseConnector):
    """
    Connector for SAM.gov contract opportunities.
    Pages through the search API per set-aside category and normalizes results.
    """

    source_id = "sam"

    DEFAULT_HEADERS = {
        "User-Agent": "sam-fetcher/0.1 (bulk opportunity fetcher)",
        "Accept": "application/json",
    }

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        client: Optional[httpx.Client] = None,
        timeout: float = 60.0,
        max_attempts: int = MAX_ATTEMPTS,
    ):
        """
        Args:
            api_key: SAM.gov API key (falls back to SAM_API_KEY)
            base_url: Search endpoint override (falls back to SAM_API_URL)
            client: Optional httpx client
            timeout: Per-request timeout in seconds when creating a client
            max_attempts: Attempts per page before giving up
        """
        self._api_key = api_key or os.environ.get("SAM_API_KEY") or None
        self._base_url = base_url or os.environ.get("SAM_API_URL") or SEARCH_URL
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            headers=self.DEFAULT_HEADERS,
        )
        self._max_attempts = max_attempts

    def close(self) -> None:
        """Close the HTTP client if this connector created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "SamConnector":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _resolve_api_key(self, api_key: Optional[str]) -> str:
        key = api_key or self._api_key
        if not key:
            raise ValueError("SAM.gov API key is required (pass api_key or set SAM_API_KEY)")
        return key

    def _build_params(
        self,
        request: FetchRequest,
        set_aside: str,
        offset: int,
        api_key: str,
    ) -> dict[str, str]:
        """Query parameters for one page."""
        params = {
            "api_key": api_key,
            "postedFrom": request.posted_from,
            "postedTo": request.posted_to,
            "status": STATUS_ACTIVE,
        }
        if set_aside:
            params["typeOfSetAside"] = set_aside
        params["limit"] = str(request.limit)
        params["offset"] = str(offset)
        return params

    def _get_page(self, params: dict[str, str]) -> dict[str, Any]:
        """
        Single GET attempt. Classifies the status before reading the body.
        Raises RetryableStatusError (429/5xx) or UpstreamRejectedError (other 4xx).
        Anything below 400 is read as a body.
        """
        resp = self._client.get(self._base_url, params=params)
        status = resp.status_code

        if is_retryable_status(status):
            raise RetryableStatusError(status)
        if status >= 400:
            body = resp.text[:ERROR_BODY_LIMIT]
            logger.warning("SAM.gov rejected request (%d): %s", status, body)
            raise UpstreamRejectedError(status, body)

        try:
            payload = resp.json()
        except ValueError:
            logger.debug("SAM.gov returned non-JSON body (status=%d)", status)
            return {}
        return payload if isinstance(payload, dict) else {}

    def search_page(
        self,
        request: FetchRequest,
        set_aside: str,
        offset: int,
        api_key: Optional[str] = None,
    ) -> list[RawOpportunity]:
        """Fetch one page of results, retrying transient failures."""
        params = self._build_params(request, set_aside, offset, self._resolve_api_key(api_key))
        payload = retry_call(
            lambda: self._get_page(params),
            max_attempts=self._max_attempts,
            retryable_exceptions=(RetryableStatusError, httpx.TransportError),
            description=f"SAM.gov search (set-aside={set_aside or '-'}, offset={offset})",
        )
        # Non-object items still count toward page length; they normalize to nothing
        return [
            RawOpportunity(data=item if isinstance(item, dict) else {})
            for item in extract_results(payload)
        ]

    def normalize(self, raw: RawOpportunity) -> Optional[NormalizedOpportunity]:
        """Convert raw record to NormalizedOpportunity."""
        return normalize_record(raw)
