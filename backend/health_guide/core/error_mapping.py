"""Shared error code mapping for model failures and API envelopes."""
from typing import Any

MODEL_ERROR_CODE_UNAVAILABLE = "MODEL_UNAVAILABLE"
MODEL_ERROR_CODE_TRANSPORT = "MODEL_TRANSPORT_FAILED"
MODEL_ERROR_CODE_EMPTY_OUTPUT = "MODEL_EMPTY_OUTPUT"
MODEL_ERROR_CODE_INVALID_JSON = "MODEL_INVALID_JSON"
MODEL_ERROR_CODE_SCHEMA = "MODEL_SCHEMA_MISMATCH"
MODEL_ERROR_CODE_PHOTO = "PHOTO_DECODE_FAILED"

_RETRYABLE_CODES = frozenset({MODEL_ERROR_CODE_TRANSPORT, MODEL_ERROR_CODE_EMPTY_OUTPUT})


def classify_model_error_code(err: BaseException) -> str:
    """Map a failure raised on the model path to a stable error code."""
    code = getattr(err, "code", None)
    if isinstance(code, str) and code:
        return code
    lowered = str(err).lower()
    if "api key" in lowered or "not configured" in lowered:
        return MODEL_ERROR_CODE_UNAVAILABLE
    if "data uri" in lowered or "base64" in lowered:
        return MODEL_ERROR_CODE_PHOTO
    return MODEL_ERROR_CODE_TRANSPORT


def is_retryable_code(code: str) -> bool:
    """Return whether a model failure with this code may be retried."""
    return code in _RETRYABLE_CODES


def build_error_payload(
    code: str,
    message: str,
    details: str | None = None,
    raw_output: str | None = None,
) -> dict[str, Any]:
    """Build the standard error object used inside response envelopes."""
    payload: dict[str, Any] = {"code": code, "message": message}
    if details:
        payload["details"] = details
    if raw_output:
        payload["raw_output"] = raw_output
    return payload
