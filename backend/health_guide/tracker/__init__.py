"""Medicine tracker: schedules, daily dose log and progress."""
from .models import (
    DailyLog,
    DoseSlot,
    DoseStatus,
    Medicine,
    MedicineCreate,
    MedicineSchedule,
)
from .progress import DoseNotScheduledError, daily_progress, next_dose_status, toggle_dose
from .store import BaseMedicineStore, InMemoryMedicineStore, MedicineNotFoundError

__all__ = [
    "DailyLog",
    "DoseSlot",
    "DoseStatus",
    "Medicine",
    "MedicineCreate",
    "MedicineSchedule",
    "DoseNotScheduledError",
    "daily_progress",
    "next_dose_status",
    "toggle_dose",
    "BaseMedicineStore",
    "InMemoryMedicineStore",
    "MedicineNotFoundError",
]
