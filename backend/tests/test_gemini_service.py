from unittest.mock import MagicMock, PropertyMock

import pytest

from health_guide.services.llm import GeminiConfig, GeminiService
from health_guide.services.llm.base import (
    GenerationOptions,
    LLMEmptyOutputError,
    LLMTransportError,
    LLMUnavailableError,
    MediaPart,
)

SCHEMA = {"type": "object", "properties": {"riskLevel": {"type": "string"}}}


def _service(response_text: str = '{"riskLevel": "Green"}') -> GeminiService:
    service = GeminiService.__new__(GeminiService)
    service.config = GeminiConfig(api_key="test-key", timeout_s=12.0)
    service.model = MagicMock()
    service.model.generate_content.return_value = MagicMock(text=response_text)
    return service


def test_generate_forwards_schema_media_and_timeout():
    service = _service()
    options = GenerationOptions(
        temperature=0.2,
        json_schema=SCHEMA,
        media=(MediaPart(mime_type="image/png", data=b"img"),),
    )

    output = service.generate("assess this", options)

    assert output == '{"riskLevel": "Green"}'
    args, kwargs = service.model.generate_content.call_args
    assert args[0] == ["assess this", {"mime_type": "image/png", "data": b"img"}]
    generation_config = kwargs["generation_config"]
    assert generation_config["temperature"] == 0.2
    assert generation_config["response_mime_type"] == "application/json"
    assert generation_config["response_schema"] == SCHEMA
    assert kwargs["request_options"] == {"timeout": 12.0}


def test_generate_without_schema_uses_config_defaults():
    service = _service("plain text")

    service.generate("hello")

    _, kwargs = service.model.generate_content.call_args
    generation_config = kwargs["generation_config"]
    assert "response_mime_type" not in generation_config
    assert generation_config["temperature"] == service.config.temperature
    assert generation_config["max_output_tokens"] == service.config.max_output_tokens


def test_generate_wraps_sdk_errors_as_transport_errors():
    service = _service()
    service.model.generate_content.side_effect = RuntimeError("503 unavailable")

    with pytest.raises(LLMTransportError, match="503 unavailable"):
        service.generate("hello")


def test_blocked_candidate_raises_empty_output():
    service = _service()
    response = MagicMock()
    type(response).text = PropertyMock(side_effect=ValueError("no parts"))
    service.model.generate_content.return_value = response

    with pytest.raises(LLMEmptyOutputError):
        service.generate("hello")


def test_blank_text_raises_empty_output():
    service = _service("   ")

    with pytest.raises(LLMEmptyOutputError):
        service.generate("hello")


def test_config_from_env_requires_api_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)

    with pytest.raises(LLMUnavailableError):
        GeminiConfig.from_env()


def test_config_from_env_reads_overrides(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.setenv("GOOGLE_API_KEY", "google-key")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-custom")
    monkeypatch.setenv("GEMINI_TIMEOUT_S", "5")

    config = GeminiConfig.from_env()

    assert config.api_key == "google-key"
    assert config.model_name == "gemini-custom"
    assert config.timeout_s == 5.0
    assert config.temperature == 0.2


def test_config_from_env_rejects_invalid_number(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "key")
    monkeypatch.setenv("GEMINI_TIMEOUT_S", "soon")

    with pytest.raises(ValueError, match="GEMINI_TIMEOUT_S"):
        GeminiConfig.from_env()


def test_service_configures_sdk(monkeypatch):
    fake_genai = MagicMock()
    monkeypatch.setattr("health_guide.services.llm.gemini.genai", fake_genai)

    service = GeminiService(GeminiConfig(api_key="k", model_name="gemini-test"))

    fake_genai.configure.assert_called_once_with(api_key="k")
    fake_genai.GenerativeModel.assert_called_once_with("gemini-test")
    assert service.model is fake_genai.GenerativeModel.return_value
