"""Short-lived symptom context carried from details entry to the result view."""
from __future__ import annotations

import threading
import time
import uuid
from dataclasses import dataclass, field, replace
from typing import Callable

from ..core.assessment import Demographics, SymptomInput
from ..core.logging_utils import log_event


class SessionNotFoundError(KeyError):
    """Raised when a context id is unknown, already consumed or expired."""


class SymptomsMissingError(ValueError):
    """Raised when a context is consumed before any description or photo was stored."""


@dataclass(frozen=True)
class SymptomContext:
    """Details and symptoms gathered for one classification."""

    session_id: str
    created_at: float
    demographics: Demographics = field(default_factory=Demographics)
    description: str = ""
    photo: str | None = None

    def to_symptom_input(self) -> SymptomInput:
        return SymptomInput(
            description=self.description,
            photo=self.photo,
            demographics=self.demographics,
        )


class SymptomContextStore:
    """
    In-memory store of symptom contexts.

    A context is created on details entry, updated on symptom entry and
    consumed exactly once by the result call. Contexts older than ``ttl_s``
    are treated as missing.
    """

    def __init__(self, ttl_s: float = 1800.0, clock: Callable[[], float] = time.monotonic) -> None:
        if ttl_s <= 0:
            raise ValueError("ttl_s must be positive")
        self._ttl_s = ttl_s
        self._clock = clock
        self._contexts: dict[str, SymptomContext] = {}
        self._lock = threading.Lock()

    def _purge_expired_locked(self) -> None:
        now = self._clock()
        expired = [
            session_id
            for session_id, context in self._contexts.items()
            if now - context.created_at > self._ttl_s
        ]
        for session_id in expired:
            del self._contexts[session_id]
        if expired:
            log_event(
                component="sessions",
                event="contexts_expired",
                details={"count": len(expired)},
            )

    def _get_locked(self, session_id: str) -> SymptomContext:
        self._purge_expired_locked()
        try:
            return self._contexts[session_id]
        except KeyError:
            raise SessionNotFoundError(session_id) from None

    def create(self, demographics: Demographics | None = None) -> SymptomContext:
        context = SymptomContext(
            session_id=uuid.uuid4().hex,
            created_at=self._clock(),
            demographics=demographics or Demographics(),
        )
        with self._lock:
            self._purge_expired_locked()
            self._contexts[context.session_id] = context
        log_event(component="sessions", event="context_created")
        return context

    def get(self, session_id: str) -> SymptomContext:
        with self._lock:
            return self._get_locked(session_id)

    def update_symptoms(
        self,
        session_id: str,
        description: str | None = None,
        photo: str | None = None,
        demographics: Demographics | None = None,
    ) -> SymptomContext:
        """Store symptom text and photo; an empty photo string removes the photo."""
        with self._lock:
            context = self._get_locked(session_id)
            changes: dict[str, object] = {}
            if description is not None:
                changes["description"] = description
            if photo is not None:
                changes["photo"] = photo if photo.strip() else None
            if demographics is not None:
                changes["demographics"] = context.demographics.merged_with(demographics)
            updated = replace(context, **changes)
            self._contexts[session_id] = updated
        return updated

    def consume(self, session_id: str, require_symptoms: bool = False) -> SymptomInput:
        """
        Remove the context and return it as classifier input.

        With ``require_symptoms`` a context holding neither a description nor a
        photo raises SymptomsMissingError and stays in the store.
        """
        with self._lock:
            context = self._get_locked(session_id)
            if require_symptoms and context.to_symptom_input().is_empty():
                raise SymptomsMissingError(session_id)
            del self._contexts[session_id]
        log_event(component="sessions", event="context_consumed")
        return context.to_symptom_input()

    def discard(self, session_id: str) -> None:
        with self._lock:
            self._contexts.pop(session_id, None)

    def __len__(self) -> int:
        with self._lock:
            self._purge_expired_locked()
            return len(self._contexts)
