"""Configuration and service factory for the health guide backend."""
import os
import threading
from typing import Dict, Any, Optional

from ..core.logging_utils import log_event
from ..services.llm import BaseLLMModel, GeminiService
from ..sessions import SymptomContextStore
from ..tracker import BaseMedicineStore, InMemoryMedicineStore


# Singleton service instances
_services: Optional[Dict[str, Any]] = None
_services_lock = threading.Lock()
_SUPPORTED_LLM_VALUES = ("gemini", "none")


def _normalize_choice(env_name: str, supported: tuple[str, ...], default: str) -> str:
    raw = os.environ.get(env_name, default).strip().lower()
    if raw in supported:
        return raw
    supported_values = ", ".join(supported)
    raise ValueError(
        f"Unsupported {env_name} value '{raw}'. Supported values: {supported_values}."
    )


def _get_float_env(name: str, default: float) -> float:
    raw = os.environ.get(name, str(default))
    try:
        value = float(raw)
    except ValueError as err:
        raise ValueError(f"{name} must be a number") from err
    if value <= 0:
        raise ValueError(f"{name} must be positive")
    return value


def _build_llm(service_name: str) -> Optional[BaseLLMModel]:
    if service_name == "none":
        log_event(component="config", event="llm_disabled")
        return None
    try:
        return GeminiService()
    except Exception as err:
        # Keyword fallback still answers without a model.
        log_event(
            component="config",
            event="llm_unavailable",
            level="ERROR",
            details={"service": service_name, "error": str(err)},
        )
        return None


def get_services() -> Dict[str, Any]:
    """
    Factory function to get or initialize service instances.

    Returns a dictionary with:
        - 'llm': Language Model service, or None when unavailable
        - 'sessions': Symptom context store
        - 'medicines': Medicine tracker store
    """
    global _services
    with _services_lock:
        if _services is None:
            llm_name = _normalize_choice("LLM_SERVICE", _SUPPORTED_LLM_VALUES, "gemini")
            log_event(component="config", event="services_init", details={"llm": llm_name})
            medicines: BaseMedicineStore = InMemoryMedicineStore()
            _services = {
                "llm": _build_llm(llm_name),
                "sessions": SymptomContextStore(
                    ttl_s=_get_float_env("SESSION_TTL_S", 1800.0)
                ),
                "medicines": medicines,
            }
        return _services


def reset_services() -> None:
    """Drop the cached services so the next call rebuilds them from the environment."""
    global _services
    with _services_lock:
        _services = None


def get_llm_service() -> Optional[BaseLLMModel]:
    """Get the LLM service instance."""
    return get_services()["llm"]


def get_session_store() -> SymptomContextStore:
    """Get the symptom context store."""
    return get_services()["sessions"]


def get_medicine_store() -> BaseMedicineStore:
    """Get the medicine tracker store."""
    return get_services()["medicines"]
