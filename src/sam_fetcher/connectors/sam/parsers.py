"""Parsing utilities for SAM.gov search responses."""

import logging
from typing import Any, Optional

from sam_fetcher.fingerprint import content_hash
from sam_fetcher.models.opportunity import NormalizedOpportunity
from sam_fetcher.models.raw import RawOpportunity

from .constants import FIELD_FALLBACKS, NOTICE_ID_KEYS, RESULT_KEYS

logger = logging.getLogger(__name__)


def _as_text(value: Any) -> Optional[str]:
    """String form of a scalar value; None for missing or nested values."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


def first_present(data: dict[str, Any], keys: tuple[str, ...], default: str = "") -> str:
    """First key whose value is a usable scalar (empty strings count as present)."""
    for key in keys:
        text = _as_text(data.get(key))
        if text is not None:
            return text
    return default


def resolve_notice_id(data: dict[str, Any]) -> str:
    """First non-empty identifier among the known aliases, or ""."""
    for key in NOTICE_ID_KEYS:
        text = _as_text(data.get(key))
        if text and text.strip():
            return text
    return ""


def descriptive_fields(data: dict[str, Any]) -> dict[str, str]:
    """Resolve every hashed field through its fallback chain."""
    return {name: first_present(data, keys) for name, keys in FIELD_FALLBACKS.items()}


def normalize_record(raw: RawOpportunity) -> Optional[NormalizedOpportunity]:
    """
    Map one raw search result to NormalizedOpportunity.
    Returns None when no identifier resolves; missing fields become "".
    """
    d = raw.data
    notice_id = resolve_notice_id(d)
    if not notice_id:
        logger.debug("Dropping record without notice id (keys=%s)", sorted(d)[:10])
        return None

    fields = descriptive_fields(d)
    return NormalizedOpportunity.model_validate(
        {
            "noticeId": notice_id,
            **fields,
            "active": True,
            "contentHash": content_hash(fields),
            "raw": d,
        }
    )


def extract_results(body: Any) -> list[dict[str, Any]]:
    """
    Return the page of results from a search response.
    The first recognized key holding a list wins; unknown shapes yield [].
    """
    if not isinstance(body, dict):
        return []
    for key in RESULT_KEYS:
        value = body.get(key)
        if isinstance(value, list):
            return value
    logger.debug("No result list in response (keys=%s)", sorted(body)[:10])
    return []
