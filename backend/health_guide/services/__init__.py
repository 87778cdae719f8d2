"""Health guide services (LLM)."""
from .llm import (
    BaseLLMModel,
    GenerationOptions,
    MediaPart,
    LLMGenerationError,
    LLMTransportError,
    LLMEmptyOutputError,
    LLMUnavailableError,
    GeminiConfig,
    GeminiService,
)

__all__ = [
    "BaseLLMModel",
    "GenerationOptions",
    "MediaPart",
    "LLMGenerationError",
    "LLMTransportError",
    "LLMEmptyOutputError",
    "LLMUnavailableError",
    "GeminiConfig",
    "GeminiService",
]
