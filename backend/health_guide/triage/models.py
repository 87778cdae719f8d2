"""Model output schema and tagged classification outcomes."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from ..core.assessment import RiskAssessment, RiskLevel
from ..core.types import ClassificationSource

# Declared to the model as structured output. Gemini accepts the OpenAPI
# subset only: no additionalProperties, nullable instead of type unions.
MODEL_OUTPUT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": [
        "riskLevel",
        "title",
        "summary",
        "reasons",
        "precautions",
        "nextAction",
        "mapQueryRequired",
    ],
    "properties": {
        "riskLevel": {"type": "string", "enum": ["Green", "Yellow", "Red"]},
        "title": {"type": "string"},
        "summary": {"type": "string"},
        "reasons": {"type": "array", "items": {"type": "string"}},
        "precautions": {"type": "array", "items": {"type": "string"}},
        "nextAction": {"type": "string"},
        "specialist": {"type": "string", "nullable": True},
        "mapQueryRequired": {"type": "boolean"},
        "mapQuery": {"type": "string", "nullable": True},
    },
}


class ModelAssessment(BaseModel):
    """The part of a RiskAssessment the model is asked to produce."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    risk_level: RiskLevel
    title: str = Field(..., min_length=1)
    summary: str = Field(..., min_length=1)
    reasons: List[str] = Field(default_factory=list)
    precautions: List[str] = Field(default_factory=list)
    next_action: str = Field(..., min_length=1)
    specialist: Optional[str] = None
    map_query_required: bool
    map_query: Optional[str] = None

    @model_validator(mode="after")
    def _check_map_query(self) -> "ModelAssessment":
        if self.map_query is not None and not self.map_query.strip():
            self.map_query = None
        if self.specialist is not None and not self.specialist.strip():
            self.specialist = None
        if self.map_query_required and self.map_query is None:
            raise ValueError("mapQuery is required when mapQueryRequired is true")
        if not self.map_query_required and self.map_query is not None:
            raise ValueError("mapQuery must be absent when mapQueryRequired is false")
        if self.risk_level is not RiskLevel.GREEN and not self.map_query_required:
            raise ValueError("Yellow and Red assessments must request a map query")
        if self.risk_level is RiskLevel.RED and any(item.strip() for item in self.precautions):
            raise ValueError("Red assessments must not list home-care precautions")
        return self

    def to_assessment(self) -> RiskAssessment:
        return RiskAssessment(
            risk_level=self.risk_level,
            title=self.title.strip(),
            summary=self.summary.strip(),
            reasons=tuple(item.strip() for item in self.reasons if item.strip()),
            precautions=tuple(item.strip() for item in self.precautions if item.strip()),
            next_action=self.next_action.strip(),
            hospital_required=self.risk_level is RiskLevel.RED,
            specialist=self.specialist.strip() if self.specialist else None,
            map_query_required=self.map_query_required,
            map_query=self.map_query.strip() if self.map_query else None,
        )


@dataclass(frozen=True)
class AssessmentOk:
    """The model produced a schema-valid assessment."""

    assessment: RiskAssessment


@dataclass(frozen=True)
class SchemaError:
    """The model answered, but the answer is not a valid assessment."""

    code: str
    message: str
    raw_output: str = ""


@dataclass(frozen=True)
class TransportError:
    """The model could not be reached or returned nothing usable."""

    code: str
    message: str


ModelOutcome = Union[AssessmentOk, SchemaError, TransportError]


@dataclass(frozen=True)
class ClassificationResult:
    """Assessment plus the path that produced it."""

    assessment: RiskAssessment
    source: ClassificationSource
    error_code: str | None = None
