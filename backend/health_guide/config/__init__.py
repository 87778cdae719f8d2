"""Configuration module for the health guide backend."""
from .settings import (
    get_services,
    get_llm_service,
    get_medicine_store,
    get_session_store,
    reset_services,
)

__all__ = [
    "get_services",
    "get_llm_service",
    "get_medicine_store",
    "get_session_store",
    "reset_services",
]
