"""Symptom risk classifier: model-backed assessment with a deterministic fallback."""
from __future__ import annotations

import json
import os
import time
from typing import Union

from pydantic import ValidationError

from ..core.assessment import RiskAssessment, SymptomInput
from ..core.error_mapping import (
    MODEL_ERROR_CODE_INVALID_JSON,
    MODEL_ERROR_CODE_PHOTO,
    MODEL_ERROR_CODE_SCHEMA,
    MODEL_ERROR_CODE_TRANSPORT,
    classify_model_error_code,
    is_retryable_code,
)
from ..core.logging_utils import log_event, log_latency_event
from ..services.llm.base import (
    BaseLLMModel,
    GenerationOptions,
    LLMUnavailableError,
    MediaPart,
)
from .fallback_rules import evaluate_fallback_rules, insufficient_information_assessment
from .models import (
    MODEL_OUTPUT_SCHEMA,
    AssessmentOk,
    ClassificationResult,
    ModelAssessment,
    ModelOutcome,
    SchemaError,
    TransportError,
)
from .prompts import (
    PHOTO_NOTE,
    PROBLEM_TEMPLATE,
    RISK_ASSESSMENT_PROMPT,
    USER_DETAILS_TEMPLATE,
)
from .utils import extract_json_from_text, parse_data_uri

MODEL_TEMPERATURE = 0.2
_COMPONENT = "classifier"


class _ConfiguredLLM:
    """Marker for "resolve the model from the service configuration"."""

    def __repr__(self) -> str:
        return "CONFIGURED_LLM"


CONFIGURED_LLM = _ConfiguredLLM()

LLMChoice = Union[BaseLLMModel, None, _ConfiguredLLM]


def _get_model_retries() -> int:
    raw = os.environ.get("HEALTH_GUIDE_MODEL_RETRIES", "0")
    try:
        value = int(raw)
    except ValueError:
        value = -1
    if value < 0:
        log_event(
            component=_COMPONENT,
            event="invalid_retry_setting",
            level="WARNING",
            details={"value": raw},
        )
        return 0
    return value


def build_assessment_prompt(symptom_input: SymptomInput) -> str:
    """Render the instruction prompt with demographics and the verbatim description."""
    demographics = symptom_input.demographics
    sections = [
        RISK_ASSESSMENT_PROMPT,
        USER_DETAILS_TEMPLATE.format(
            name=demographics.display_value("name"),
            age=demographics.display_value("age"),
            weight=demographics.display_value("weight"),
            height=demographics.display_value("height"),
            gender=demographics.display_value("gender"),
        ),
        PROBLEM_TEMPLATE.format(description=symptom_input.description),
    ]
    if symptom_input.has_photo:
        sections.append(PHOTO_NOTE)
    return "\n\n".join(sections)


def build_generation_options(media: tuple[MediaPart, ...] = ()) -> GenerationOptions:
    return GenerationOptions(
        temperature=MODEL_TEMPERATURE,
        json_schema=MODEL_OUTPUT_SCHEMA,
        media=media,
    )


def parse_model_output(raw_output: str) -> ModelOutcome:
    """Strictly deserialize model text into an assessment outcome."""
    try:
        parsed = json.loads(extract_json_from_text(raw_output))
    except json.JSONDecodeError as err:
        return SchemaError(
            code=MODEL_ERROR_CODE_INVALID_JSON,
            message=f"Failed to parse model output as JSON object: {err}",
            raw_output=raw_output,
        )

    if not isinstance(parsed, dict):
        return SchemaError(
            code=MODEL_ERROR_CODE_INVALID_JSON,
            message="Model output is valid JSON but not an object.",
            raw_output=raw_output,
        )

    try:
        assessment = ModelAssessment.model_validate(parsed).to_assessment()
    except ValidationError as err:
        return SchemaError(
            code=MODEL_ERROR_CODE_SCHEMA,
            message=str(err),
            raw_output=raw_output,
        )
    return AssessmentOk(assessment=assessment)


def _resolve_llm(llm: LLMChoice) -> BaseLLMModel:
    if isinstance(llm, _ConfiguredLLM):
        from ..config import get_llm_service

        llm = get_llm_service()
    if llm is None:
        raise LLMUnavailableError("No model backend is configured.")
    return llm


def request_model_assessment(
    symptom_input: SymptomInput,
    llm: LLMChoice = CONFIGURED_LLM,
) -> ModelOutcome:
    """
    Run the model-backed path once (plus configured transport retries).

    Never raises: every failure is returned as a SchemaError or TransportError.
    """
    media: tuple[MediaPart, ...] = ()
    if symptom_input.photo is not None:
        try:
            media = (parse_data_uri(symptom_input.photo),)
        except ValueError as err:
            return TransportError(code=MODEL_ERROR_CODE_PHOTO, message=str(err))

    try:
        resolved_llm = _resolve_llm(llm)
    except Exception as err:
        return TransportError(code=classify_model_error_code(err), message=str(err))

    prompt = build_assessment_prompt(symptom_input)
    options = build_generation_options(media)
    attempts = 1 + _get_model_retries()
    last_error: TransportError | None = None

    for attempt in range(1, attempts + 1):
        started = time.perf_counter()
        try:
            raw_output = resolved_llm.generate(prompt, options=options)
        except Exception as err:
            code = classify_model_error_code(err)
            log_latency_event(
                component=_COMPONENT,
                event="model_call",
                stage="model",
                duration_s=time.perf_counter() - started,
                status="error",
                level="WARNING",
                details={"attempt": attempt, "code": code},
            )
            last_error = TransportError(code=code, message=str(err))
            if not is_retryable_code(code):
                break
            continue

        log_latency_event(
            component=_COMPONENT,
            event="model_call",
            stage="model",
            duration_s=time.perf_counter() - started,
            status="ok",
            details={"attempt": attempt, "output_chars": len(raw_output)},
        )
        return parse_model_output(raw_output)

    if last_error is not None:
        return last_error
    return TransportError(code=MODEL_ERROR_CODE_TRANSPORT, message="Model call failed.")


def fallback_assessment(symptom_input: SymptomInput) -> RiskAssessment:
    """Keyword classification of the description; never below Yellow when it is blank."""
    if not symptom_input.has_description:
        return insufficient_information_assessment()
    return evaluate_fallback_rules(symptom_input.description).assessment


def classify_with_source(
    symptom_input: SymptomInput,
    llm: LLMChoice = CONFIGURED_LLM,
) -> ClassificationResult:
    """
    Classify one symptom input and report which path answered.

    :param symptom_input: Description, optional photo and demographics
    :param llm: LLM service; omitted means the configured service, None means no model
    :return: Assessment with its source ("model", "fallback", "insufficient_input")
    """
    if symptom_input.is_empty():
        log_event(component=_COMPONENT, event="insufficient_input")
        return ClassificationResult(
            assessment=insufficient_information_assessment(),
            source="insufficient_input",
        )

    outcome = request_model_assessment(symptom_input, llm)
    if isinstance(outcome, AssessmentOk):
        log_event(
            component=_COMPONENT,
            event="classified",
            details={"source": "model", "risk_level": outcome.assessment.risk_level.value},
        )
        return ClassificationResult(assessment=outcome.assessment, source="model")

    assessment = fallback_assessment(symptom_input)
    log_event(
        component=_COMPONENT,
        event="model_fallback",
        level="WARNING",
        details={
            "code": outcome.code,
            "error": outcome.message,
            "risk_level": assessment.risk_level.value,
        },
    )
    return ClassificationResult(
        assessment=assessment,
        source="fallback",
        error_code=outcome.code,
    )


def classify(symptom_input: SymptomInput, llm: LLMChoice = CONFIGURED_LLM) -> RiskAssessment:
    """Return a risk assessment for the input; never raises."""
    return classify_with_source(symptom_input, llm).assessment
