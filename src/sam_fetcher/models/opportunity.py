"""Normalized opportunity model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Wire names of the fields covered by the content hash
DESCRIPTIVE_FIELDS: tuple[str, ...] = (
    "title",
    "solicitationNumber",
    "type",
    "postedDate",
    "responseDeadline",
    "setAsideCode",
    "naicsCode",
    "classificationCode",
    "uiLink",
)


class NormalizedOpportunity(BaseModel):
    """Canonical opportunity record produced from one search API result."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    notice_id: str = Field(..., min_length=1, description="SAM.gov notice ID")

    title: str = ""
    solicitation_number: str = ""
    notice_type: str = Field("", alias="type")
    posted_date: str = ""
    response_deadline: str = ""
    set_aside_code: str = ""
    naics_code: str = ""
    classification_code: str = ""
    ui_link: str = ""

    active: bool = True
    content_hash: str = Field(..., description="sha256:<hex> over the descriptive fields")
    raw: dict[str, Any] = Field(default_factory=dict)

    def descriptive_fields(self) -> dict[str, str]:
        """Return the hashed fields keyed by wire name."""
        data = self.model_dump(by_alias=True)
        return {name: data[name] for name in DESCRIPTIVE_FIELDS}
