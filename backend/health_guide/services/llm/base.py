"""Base class for Language Model services."""
import abc
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from ...core.error_mapping import (
    MODEL_ERROR_CODE_EMPTY_OUTPUT,
    MODEL_ERROR_CODE_TRANSPORT,
    MODEL_ERROR_CODE_UNAVAILABLE,
)


@dataclass(frozen=True)
class MediaPart:
    """Inline binary attachment sent next to the text prompt."""

    mime_type: str
    data: bytes


@dataclass(frozen=True)
class GenerationOptions:
    """Optional generation controls shared across LLM backends."""

    max_new_tokens: int | None = None
    temperature: float | None = None
    json_schema: Mapping[str, Any] | None = None
    media: Sequence[MediaPart] = field(default_factory=tuple)
    timeout_s: float | None = None


class LLMGenerationError(RuntimeError):
    """Base runtime error for LLM generation failures."""

    code = MODEL_ERROR_CODE_TRANSPORT


class LLMTransportError(LLMGenerationError):
    """Raised when the request to the model endpoint fails or times out."""


class LLMEmptyOutputError(LLMGenerationError):
    """Raised when the model returns no usable text (blocked or empty)."""

    code = MODEL_ERROR_CODE_EMPTY_OUTPUT


class LLMUnavailableError(LLMGenerationError):
    """Raised when no model backend is configured."""

    code = MODEL_ERROR_CODE_UNAVAILABLE


class BaseLLMModel(abc.ABC):
    """Abstract base class for LLM (Language Model) services."""

    @abc.abstractmethod
    def generate(self, prompt: str, options: GenerationOptions | None = None) -> str:
        """
        Generate text response from a prompt.

        :param prompt: Input text prompt
        :param options: Optional generation controls
        :return: Generated text response
        """
        pass
