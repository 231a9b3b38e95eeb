"""Runtime configuration read from environment variables."""

import os
from collections.abc import Mapping
from typing import Optional

from pydantic import BaseModel, Field

from sam_fetcher.connectors.sam.constants import SEARCH_URL


class FetcherSettings(BaseModel):
    """API credentials and connection settings."""

    sam_api_key: Optional[str] = None
    auth_token: Optional[str] = Field(default=None, description="Shared token callers must send")
    sam_api_url: str = SEARCH_URL
    timeout: float = Field(default=60.0, gt=0)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "FetcherSettings":
        """Load settings from os.environ (or the given mapping). Empty values count as unset."""
        env = os.environ if environ is None else environ

        def _get(key: str) -> Optional[str]:
            value = (env.get(key) or "").strip()
            return value or None

        data: dict = {
            "sam_api_key": _get("SAM_API_KEY"),
            "auth_token": _get("FETCHER_AUTH_TOKEN"),
        }
        if _get("SAM_API_URL"):
            data["sam_api_url"] = _get("SAM_API_URL")
        if _get("SAM_TIMEOUT"):
            data["timeout"] = _get("SAM_TIMEOUT")
        return cls.model_validate(data)
