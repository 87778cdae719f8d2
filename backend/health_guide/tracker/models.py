"""Medicine tracker models."""
from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DoseSlot(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    NIGHT = "night"


class DoseStatus(str, Enum):
    TAKEN = "taken"
    MISSED = "missed"


class MedicineSchedule(BaseModel):
    """Time slots a medicine is taken in; at least one must be selected."""

    morning: bool = False
    afternoon: bool = False
    night: bool = False

    @model_validator(mode="after")
    def _require_slot(self) -> "MedicineSchedule":
        if not (self.morning or self.afternoon or self.night):
            raise ValueError("At least one time slot must be selected")
        return self

    def includes(self, slot: DoseSlot) -> bool:
        return bool(getattr(self, slot.value))

    def slots(self) -> list[DoseSlot]:
        return [slot for slot in DoseSlot if self.includes(slot)]


class MedicineCreate(BaseModel):
    """Request body for adding a medicine."""

    name: str = Field(..., min_length=1, description="Medicine name")
    dosage: str = Field(..., min_length=1, description="e.g. 1 tablet, 5ml")
    schedule: MedicineSchedule
    start_date: date = Field(default_factory=date.today)
    end_date: Optional[date] = None
    is_ongoing: bool = False
    reminders: bool = False
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    @model_validator(mode="after")
    def _check_dates(self) -> "MedicineCreate":
        if self.is_ongoing:
            self.end_date = None
        elif self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class Medicine(MedicineCreate):
    """Stored medicine."""

    id: str

    def is_active_on(self, day: date) -> bool:
        if day < self.start_date:
            return False
        if self.is_ongoing or self.end_date is None:
            return True
        return day <= self.end_date


# {medicine_id: {slot: status}} for one user and one day
DailyLog = Dict[str, Dict[DoseSlot, DoseStatus]]
