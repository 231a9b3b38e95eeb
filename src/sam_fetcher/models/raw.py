"""Raw opportunity representation before normalization."""

from typing import Any

from pydantic import BaseModel, Field


class RawOpportunity(BaseModel):
    """
    Untyped record as returned by the search API.
    Field names and presence vary between API versions.
    """

    data: dict[str, Any] = Field(default_factory=dict)
