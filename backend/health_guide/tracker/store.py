"""Storage for medicines and daily dose logs."""
from __future__ import annotations

import abc
import threading
import uuid
from datetime import date

from .models import DailyLog, DoseSlot, DoseStatus, Medicine, MedicineCreate


class MedicineNotFoundError(KeyError):
    """Raised when a medicine id does not belong to the user."""


class BaseMedicineStore(abc.ABC):
    """Abstract base class for medicine tracker persistence."""

    @abc.abstractmethod
    def add_medicine(self, user_id: str, medicine: MedicineCreate) -> Medicine:
        pass

    @abc.abstractmethod
    def list_medicines(self, user_id: str) -> list[Medicine]:
        pass

    @abc.abstractmethod
    def get_log(self, user_id: str, day: date) -> DailyLog:
        """Return a copy of the user's dose log for one day."""
        pass

    @abc.abstractmethod
    def set_dose(
        self,
        user_id: str,
        day: date,
        medicine_id: str,
        slot: DoseSlot,
        status: DoseStatus | None,
    ) -> DailyLog:
        """Set (or clear, with ``None``) one slot and return the updated day log."""
        pass

    def get_medicine(self, user_id: str, medicine_id: str) -> Medicine:
        for medicine in self.list_medicines(user_id):
            if medicine.id == medicine_id:
                return medicine
        raise MedicineNotFoundError(medicine_id)


class InMemoryMedicineStore(BaseMedicineStore):
    """Process-local store, keyed by user id and ISO date."""

    def __init__(self) -> None:
        self._medicines: dict[str, dict[str, Medicine]] = {}
        self._logs: dict[tuple[str, str], DailyLog] = {}
        self._lock = threading.Lock()

    def add_medicine(self, user_id: str, medicine: MedicineCreate) -> Medicine:
        stored = Medicine(id=uuid.uuid4().hex, **medicine.model_dump())
        with self._lock:
            self._medicines.setdefault(user_id, {})[stored.id] = stored
        return stored

    def list_medicines(self, user_id: str) -> list[Medicine]:
        with self._lock:
            return list(self._medicines.get(user_id, {}).values())

    @staticmethod
    def _copy_log(log: DailyLog) -> DailyLog:
        return {medicine_id: dict(slots) for medicine_id, slots in log.items()}

    def get_log(self, user_id: str, day: date) -> DailyLog:
        with self._lock:
            return self._copy_log(self._logs.get((user_id, day.isoformat()), {}))

    def set_dose(
        self,
        user_id: str,
        day: date,
        medicine_id: str,
        slot: DoseSlot,
        status: DoseStatus | None,
    ) -> DailyLog:
        with self._lock:
            log = self._logs.setdefault((user_id, day.isoformat()), {})
            slots = log.setdefault(medicine_id, {})
            if status is None:
                slots.pop(slot, None)
                if not slots:
                    del log[medicine_id]
            else:
                slots[slot] = status
            return self._copy_log(log)
