"""Symptom risk classifier module."""
from .classifier import (
    CONFIGURED_LLM,
    build_assessment_prompt,
    classify,
    classify_with_source,
    fallback_assessment,
    parse_model_output,
    request_model_assessment,
)
from .fallback_rules import (
    FALLBACK_RULES,
    FallbackMatch,
    evaluate_fallback_rules,
    insufficient_information_assessment,
)
from .models import (
    MODEL_OUTPUT_SCHEMA,
    AssessmentOk,
    ClassificationResult,
    SchemaError,
    TransportError,
)
from .utils import encode_data_uri, extract_json_from_text, parse_data_uri

__all__ = [
    "CONFIGURED_LLM",
    "classify",
    "classify_with_source",
    "build_assessment_prompt",
    "fallback_assessment",
    "parse_model_output",
    "request_model_assessment",
    "FALLBACK_RULES",
    "FallbackMatch",
    "evaluate_fallback_rules",
    "insufficient_information_assessment",
    "MODEL_OUTPUT_SCHEMA",
    "AssessmentOk",
    "ClassificationResult",
    "SchemaError",
    "TransportError",
    "encode_data_uri",
    "extract_json_from_text",
    "parse_data_uri",
]
