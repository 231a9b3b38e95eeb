"""Framework-independent request handling for hosting the fetcher behind HTTP."""

import logging
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import ValidationError

from sam_fetcher.connectors.base import BaseConnector
from sam_fetcher.connectors.sam import SamConnector
from sam_fetcher.models.fetch import FetchRequest
from sam_fetcher.settings import FetcherSettings

logger = logging.getLogger(__name__)

AUTH_HEADER = "x-auth-token"


def health() -> dict[str, bool]:
    """Liveness payload."""
    return {"ok": True}


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None


def handle_fetch(
    body: Optional[Mapping[str, Any]],
    headers: Optional[Mapping[str, str]] = None,
    *,
    settings: Optional[FetcherSettings] = None,
    connector: Optional[BaseConnector] = None,
) -> tuple[int, dict[str, Any]]:
    """
    Validate one fetch call and run it. Returns (http_status, payload).
    Upstream failures are not caught; the host decides how to report them.
    """
    settings = settings or FetcherSettings.from_env()

    if not settings.sam_api_key:
        return 500, {"error": "Missing SAM_API_KEY env var"}

    if settings.auth_token:
        if _header(headers or {}, AUTH_HEADER) != settings.auth_token:
            logger.warning("Rejected fetch with missing or invalid %s", AUTH_HEADER)
            return 401, {"error": "Unauthorized"}

    body = body or {}
    if not body.get("postedFrom") or not body.get("postedTo"):
        return 400, {"error": "postedFrom and postedTo required"}
    try:
        request = FetchRequest.model_validate(body)
    except ValidationError as e:
        return 400, {
            "error": f"Invalid request: {e.error_count()} validation error(s)",
            "details": e.errors(include_url=False, include_context=False, include_input=False),
        }

    if connector is not None:
        result = connector.fetch_all(request, api_key=settings.sam_api_key)
    else:
        with SamConnector(
            api_key=settings.sam_api_key,
            base_url=settings.sam_api_url,
            timeout=settings.timeout,
        ) as sam:
            result = sam.fetch_all(request)
    return 200, result.to_payload()
