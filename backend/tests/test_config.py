import pytest

from health_guide.config import get_services, reset_services
from health_guide.sessions import SymptomContextStore
from health_guide.tracker import InMemoryMedicineStore


@pytest.fixture(autouse=True)
def _fresh_services():
    reset_services()
    yield
    reset_services()


def test_llm_can_be_disabled(monkeypatch):
    monkeypatch.setenv("LLM_SERVICE", "none")

    services = get_services()

    assert services["llm"] is None
    assert isinstance(services["sessions"], SymptomContextStore)
    assert isinstance(services["medicines"], InMemoryMedicineStore)


def test_services_are_cached(monkeypatch):
    monkeypatch.setenv("LLM_SERVICE", "none")

    assert get_services() is get_services()


def test_missing_api_key_leaves_llm_unset(monkeypatch):
    monkeypatch.setenv("LLM_SERVICE", "gemini")
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)

    assert get_services()["llm"] is None


def test_unsupported_llm_service_is_rejected(monkeypatch):
    monkeypatch.setenv("LLM_SERVICE", "openai")

    with pytest.raises(ValueError, match="Unsupported LLM_SERVICE"):
        get_services()


def test_session_ttl_must_be_positive(monkeypatch):
    monkeypatch.setenv("LLM_SERVICE", "none")
    monkeypatch.setenv("SESSION_TTL_S", "-5")

    with pytest.raises(ValueError, match="SESSION_TTL_S"):
        get_services()
