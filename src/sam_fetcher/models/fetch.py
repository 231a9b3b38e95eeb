"""Fetch request and result models."""

import json
from pathlib import Path
from typing import Any

try:
    import yaml
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "PyYAML is required for request files. Run: poetry install"
    ) from e
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from sam_fetcher.models.opportunity import NormalizedOpportunity

DEFAULT_SET_ASIDES = ["SBA"]
DEFAULT_LIMIT = 1000


class FetchRequest(BaseModel):
    """Parameters for one bulk fetch. Dates are passed to the API unchanged."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    posted_from: str = Field(..., min_length=1, description="e.g. 01/01/2026")
    posted_to: str = Field(..., min_length=1)
    set_asides: list[str] = Field(default_factory=lambda: list(DEFAULT_SET_ASIDES))
    limit: int = Field(default=DEFAULT_LIMIT, gt=0, description="Page size")

    @classmethod
    def from_file(cls, path: str | Path) -> "FetchRequest":
        """Load a request from a YAML or JSON file (camelCase or snake_case keys)."""
        path = Path(path)
        text = path.read_text()
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text) or {}
        return cls.model_validate(data)


class FetchMeta(BaseModel):
    """Run metadata returned alongside the fetched items."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    posted_from: str
    posted_to: str
    set_asides: list[str]
    fetched: int = 0
    pages: int = 0


class FetchResult(BaseModel):
    """Aggregated output of one fetch across all categories and pages."""

    meta: FetchMeta
    items: list[NormalizedOpportunity] = Field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict using the camelCase wire names."""
        return self.model_dump(mode="json", by_alias=True)
