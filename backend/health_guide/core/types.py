"""Common type definitions for the health guide backend."""
from typing import Any, Dict, Literal

ClassificationSource = Literal["model", "fallback", "insufficient_input"]
ErrorPayload = Dict[str, Any]  # {"code": "...", "message": "...", "details"?: "..."}
