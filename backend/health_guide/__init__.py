"""
Health Guide Package for symptom triage.

This package provides the backend of a student health guidance app:
- Risk classification of symptom text and photos with Gemini
- Deterministic keyword fallback when the model path fails
- A once-consumed symptom context bridging details, symptoms and result
- A medicine tracker with a daily dose log

Main entry point:
    classify: SymptomInput -> RiskAssessment, never raises

Core components:
    - core: Models, API schemas, logging and error codes
    - services: LLM service implementations
    - triage: Classifier, prompt and fallback rules
    - sessions: Symptom context store
    - tracker: Medicine tracker
    - config: Service configuration and factory
"""

# Classifier (primary public API)
from .triage import classify, classify_with_source

# Core models
from .core import (
    Demographics,
    RiskAssessment,
    RiskLevel,
    SymptomInput,
)

# Configuration (for service initialization)
from .config import get_services, get_llm_service

__all__ = [
    # Classifier
    "classify",
    "classify_with_source",
    # Models
    "Demographics",
    "RiskAssessment",
    "RiskLevel",
    "SymptomInput",
    # Config
    "get_services",
    "get_llm_service",
]

__version__ = "1.0.0"
