"""Hosted Gemini implementation."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

import google.generativeai as genai

from .base import (
    BaseLLMModel,
    GenerationOptions,
    LLMEmptyOutputError,
    LLMTransportError,
    LLMUnavailableError,
)
from ...core.logging_utils import log_event


@dataclass(frozen=True)
class GeminiConfig:
    """Configuration for the hosted Gemini backend."""

    api_key: str
    model_name: str = "gemini-2.5-flash"
    temperature: float = 0.2
    max_output_tokens: int = 1024
    timeout_s: float = 30.0

    @classmethod
    def from_env(cls) -> "GeminiConfig":
        api_key = (
            os.getenv("GEMINI_API_KEY", "").strip()
            or os.getenv("GOOGLE_API_KEY", "").strip()
        )
        if not api_key:
            raise LLMUnavailableError(
                "GEMINI_API_KEY (or GOOGLE_API_KEY) is required for the gemini backend; "
                "model not configured."
            )

        return cls(
            api_key=api_key,
            model_name=os.getenv("GEMINI_MODEL", "gemini-2.5-flash").strip() or "gemini-2.5-flash",
            temperature=_get_float_env("GEMINI_TEMPERATURE", 0.2),
            max_output_tokens=_get_int_env("GEMINI_MAX_OUTPUT_TOKENS", 1024),
            timeout_s=_get_float_env("GEMINI_TIMEOUT_S", 30.0),
        )


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError as err:
        raise ValueError(f"{name} must be an integer") from err


def _get_float_env(name: str, default: float) -> float:
    raw = os.getenv(name, str(default))
    try:
        return float(raw)
    except ValueError as err:
        raise ValueError(f"{name} must be a number") from err


class GeminiService(BaseLLMModel):
    """Gemini through the google-generativeai SDK."""

    def __init__(self, config: GeminiConfig | None = None) -> None:
        self.config = config or GeminiConfig.from_env()
        genai.configure(api_key=self.config.api_key)
        self.model = genai.GenerativeModel(self.config.model_name)
        log_event(
            component="gemini",
            event="model_configured",
            details={"model": self.config.model_name},
        )

    def _build_contents(self, prompt: str, options: GenerationOptions) -> list[Any]:
        # Text first, then each media part as its own segment.
        contents: list[Any] = [prompt]
        for part in options.media:
            contents.append({"mime_type": part.mime_type, "data": part.data})
        return contents

    def _build_generation_config(self, options: GenerationOptions) -> dict[str, Any]:
        generation_config: dict[str, Any] = {
            "temperature": (
                options.temperature
                if options.temperature is not None
                else self.config.temperature
            ),
            "max_output_tokens": (
                options.max_new_tokens
                if options.max_new_tokens is not None
                else self.config.max_output_tokens
            ),
        }
        if options.json_schema is not None:
            generation_config["response_mime_type"] = "application/json"
            generation_config["response_schema"] = dict(options.json_schema)
        return generation_config

    def generate(self, prompt: str, options: GenerationOptions | None = None) -> str:
        generation_options = options or GenerationOptions()
        timeout_s = (
            generation_options.timeout_s
            if generation_options.timeout_s is not None
            else self.config.timeout_s
        )
        try:
            response = self.model.generate_content(
                self._build_contents(prompt, generation_options),
                generation_config=self._build_generation_config(generation_options),
                request_options={"timeout": timeout_s},
            )
        except Exception as err:
            raise LLMTransportError(str(err)) from err

        try:
            text = response.text
        except ValueError as err:
            # Raised by the SDK when the candidate was blocked or has no parts.
            raise LLMEmptyOutputError(str(err)) from err

        if not text or not text.strip():
            raise LLMEmptyOutputError("Gemini returned an empty response.")
        return text.strip()
