"""Symptom input and risk assessment models shared by the classifier and API."""
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

DISCLAIMER = (
    "This is AI-assisted guidance, not a medical diagnosis. "
    "Always consult a qualified healthcare professional."
)

NOT_PROVIDED = "Not provided"


class RiskLevel(str, Enum):
    """Triage risk level, ordered by severity."""

    GREEN = "Green"
    YELLOW = "Yellow"
    RED = "Red"

    @property
    def severity(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {RiskLevel.GREEN: 0, RiskLevel.YELLOW: 1, RiskLevel.RED: 2}


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Demographics(_CamelModel):
    """Optional user hints; opaque strings, never range-checked."""

    name: Optional[str] = None
    age: Optional[str] = None
    weight: Optional[str] = None
    gender: Optional[str] = None
    height: Optional[str] = None

    @field_validator("name", "age", "weight", "gender", "height", mode="before")
    @classmethod
    def _stringify(cls, value):
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    def display_value(self, field_name: str) -> str:
        value = getattr(self, field_name)
        return value if value else NOT_PROVIDED

    def merged_with(self, update: "Demographics") -> "Demographics":
        """Return a copy where every field set on ``update`` wins."""
        values = self.model_dump()
        values.update(update.model_dump(exclude_none=True))
        return Demographics(**values)


class SymptomInput(_CamelModel):
    """One classification request: description, optional photo, demographics."""

    description: str = Field(default="", description="Free-text symptom description")
    photo: Optional[str] = Field(
        default=None,
        description="Optional photo of the symptom as a base64 data URI",
    )
    demographics: Demographics = Field(default_factory=Demographics)

    @field_validator("description", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("photo", mode="before")
    @classmethod
    def _blank_photo_is_absent(cls, value):
        if value is None:
            return None
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def has_description(self) -> bool:
        return bool(self.description.strip())

    @property
    def has_photo(self) -> bool:
        return self.photo is not None

    def is_empty(self) -> bool:
        return not self.has_description and not self.has_photo


class RiskAssessment(_CamelModel):
    """Structured triage result handed back to the caller."""

    model_config = ConfigDict(frozen=True)

    risk_level: RiskLevel
    title: str
    summary: str
    reasons: Tuple[str, ...] = ()
    precautions: Tuple[str, ...] = ()
    next_action: str
    hospital_required: bool
    specialist: Optional[str] = None
    map_query_required: bool
    map_query: Optional[str] = None
    disclaimer: str = DISCLAIMER

    @model_validator(mode="after")
    def _check_invariants(self) -> "RiskAssessment":
        if self.map_query_required != (self.map_query is not None):
            raise ValueError("mapQuery must be present exactly when mapQueryRequired is true")
        if self.hospital_required != (self.risk_level is RiskLevel.RED):
            raise ValueError("hospitalRequired must be true exactly when riskLevel is Red")
        return self
