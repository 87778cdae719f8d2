"""Language Model service module."""
from .base import (
    BaseLLMModel,
    GenerationOptions,
    LLMEmptyOutputError,
    LLMGenerationError,
    LLMTransportError,
    LLMUnavailableError,
    MediaPart,
)
from .gemini import GeminiConfig, GeminiService

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
