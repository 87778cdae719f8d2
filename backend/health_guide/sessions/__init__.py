"""Symptom context store."""
from .store import SessionNotFoundError, SymptomContext, SymptomContextStore, SymptomsMissingError

__all__ = [
    "SessionNotFoundError",
    "SymptomContext",
    "SymptomContextStore",
    "SymptomsMissingError",
]
