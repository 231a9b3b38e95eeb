"""Pytest fixtures for sam-fetcher tests."""

from typing import Any, Callable
from unittest.mock import patch

import httpx
import pytest

from sam_fetcher.connectors.sam import SamConnector
from sam_fetcher.models.raw import RawOpportunity


def _build_records(count: int, prefix: str = "N") -> list[dict[str, Any]]:
    """Build count minimal search results with distinct notice IDs."""
    return [
        {
            "noticeId": f"{prefix}-{i}",
            "title": f"Opportunity {prefix} {i}",
            "solicitationNumber": f"SOL-{prefix}-{i}",
            "type": "Solicitation",
            "postedDate": "2026-01-15",
            "responseDeadLine": "2026-02-15T17:00:00-05:00",
            "typeOfSetAside": "SBA",
            "naicsCode": "541511",
            "classificationCode": "D302",
            "uiLink": f"https://sam.gov/opp/{prefix}-{i}/view",
        }
        for i in range(count)
    ]


class FakeSamApi:
    """Scripted search endpoint for httpx.MockTransport; records every request."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]):
        self._responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    @property
    def params(self) -> list[dict[str, str]]:
        return [dict(r.url.params) for r in self.requests]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of tests."""
    for key in ("SAM_API_KEY", "SAM_API_URL", "FETCHER_AUTH_TOKEN", "SAM_TIMEOUT"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def no_sleep():
    """Patch backoff sleeps; yields the mock to inspect requested delays."""
    with patch("sam_fetcher.retry.time.sleep") as mock_sleep:
        yield mock_sleep


@pytest.fixture
def make_connector():
    """Factory: responder -> (SamConnector, FakeSamApi) backed by MockTransport."""

    def _make(
        responder: Callable[[httpx.Request], httpx.Response],
        **kwargs: Any,
    ) -> tuple[SamConnector, FakeSamApi]:
        api = FakeSamApi(responder)
        client = httpx.Client(transport=httpx.MockTransport(api))
        kwargs.setdefault("api_key", "test-key")
        return SamConnector(client=client, **kwargs), api

    return _make


@pytest.fixture
def sample_sam_record() -> dict[str, Any]:
    """Sample search result as returned by the v2 search API."""
    return {
        "noticeId": "a1b2c3d4e5f6",
        "title": "Janitorial Services - Fort Example",
        "solicitationNumber": "W912QR-26-Q-0001",
        "fullParentPathName": "DEPT OF DEFENSE.DEPT OF THE ARMY",
        "postedDate": "2026-01-15",
        "type": "Combined Synopsis/Solicitation",
        "baseType": "Combined Synopsis/Solicitation",
        "archiveType": "autocustom",
        "typeOfSetAsideDescription": "Total Small Business Set-Aside (FAR 19.5)",
        "typeOfSetAside": "SBA",
        "responseDeadLine": "2026-02-15T17:00:00-05:00",
        "naicsCode": "561720",
        "classificationCode": "S201",
        "active": "Yes",
        "uiLink": "https://sam.gov/opp/a1b2c3d4e5f6/view",
    }


@pytest.fixture
def raw_sam_record(sample_sam_record: dict[str, Any]) -> RawOpportunity:
    """RawOpportunity built from the sample search result."""
    return RawOpportunity(data=sample_sam_record)


@pytest.fixture
def make_records() -> Callable[..., list[dict[str, Any]]]:
    """Factory for pages of minimal search results."""
    return _build_records
