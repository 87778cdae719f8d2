"""Core models, schemas and shared utilities."""
from .assessment import (
    DISCLAIMER,
    Demographics,
    RiskAssessment,
    RiskLevel,
    SymptomInput,
)
from .types import ClassificationSource, ErrorPayload
from .schemas import (
    ClassificationResponse,
    DoseToggleRequest,
    EnvelopeResponse,
    SessionResponse,
    StatusResponse,
    SymptomUpdateRequest,
)

__all__ = [
    # Models
    "DISCLAIMER",
    "Demographics",
    "RiskAssessment",
    "RiskLevel",
    "SymptomInput",
    # Types
    "ClassificationSource",
    "ErrorPayload",
    # Schemas
    "ClassificationResponse",
    "DoseToggleRequest",
    "EnvelopeResponse",
    "SessionResponse",
    "StatusResponse",
    "SymptomUpdateRequest",
]
