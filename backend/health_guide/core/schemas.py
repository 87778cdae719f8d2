"""API request and response schemas for the health guide backend."""
from pydantic import BaseModel, Field, ConfigDict
from typing import Dict, Optional, Any

from health_guide.core.assessment import Demographics, RiskAssessment
from health_guide.core.types import ClassificationSource, ErrorPayload


# ============= Request Schemas =============

class SymptomUpdateRequest(BaseModel):
    """Request schema for PUT /sessions/{session_id}/symptoms.

    Demographic fields given here are merged over the ones captured when the
    session was created.
    """
    description: Optional[str] = Field(
        default=None,
        description="Free-text symptom description"
    )
    photo: Optional[str] = Field(
        default=None,
        description="Optional photo as a base64 data URI; empty string removes it"
    )
    demographics: Optional[Demographics] = Field(
        default=None,
        description="Optional demographic updates"
    )
    model_config = ConfigDict(extra="forbid")


class DoseToggleRequest(BaseModel):
    """Request schema for the medicine log toggle endpoint."""

    medicine_id: str = Field(..., min_length=1)
    slot: str = Field(..., description="morning | afternoon | night")
    status: str = Field(..., description="taken | missed")
    model_config = ConfigDict(extra="forbid")


# ============= Response Schemas =============

class ClassificationResponse(BaseModel):
    """Response from /classify and /classify/upload."""

    assessment: RiskAssessment = Field(..., description="Structured risk assessment")
    source: ClassificationSource = Field(
        ...,
        description="Which path produced the assessment",
    )


class SessionResponse(BaseModel):
    """Snapshot of a symptom context, without the photo payload."""

    session_id: str
    demographics: Demographics
    has_description: bool
    has_photo: bool


class EnvelopeResponse(BaseModel):
    """Envelope response for endpoints that can fail for caller reasons."""

    success: bool = Field(..., description="Whether the operation succeeded")
    data: Dict[str, Any] = Field(
        default_factory=dict,
        description="Operation payload",
    )
    error: Optional[ErrorPayload] = Field(
        default=None,
        description="Error metadata when success is false",
    )
    model_config = ConfigDict(extra="forbid")


class StatusResponse(BaseModel):
    """Generic status response for health check endpoints."""
    status: str = Field(..., description="Service status")
    system: Optional[str] = Field(None, description="System identifier")
