"""Dose toggling and daily adherence progress."""
from __future__ import annotations

from datetime import date
from typing import Iterable

from .models import DailyLog, DoseSlot, DoseStatus, Medicine
from .store import BaseMedicineStore


class DoseNotScheduledError(ValueError):
    """Raised when a dose is logged for a slot the medicine is not taken in."""


def next_dose_status(current: DoseStatus | None, requested: DoseStatus) -> DoseStatus | None:
    """Requesting the status a slot already has clears it."""
    return None if current == requested else requested


def toggle_dose(
    store: BaseMedicineStore,
    user_id: str,
    day: date,
    medicine_id: str,
    slot: DoseSlot,
    status: DoseStatus,
) -> DailyLog:
    medicine = store.get_medicine(user_id, medicine_id)
    if not medicine.schedule.includes(slot):
        raise DoseNotScheduledError(
            f"{medicine.name} is not scheduled for the {slot.value} slot"
        )
    current = store.get_log(user_id, day).get(medicine_id, {}).get(slot)
    return store.set_dose(user_id, day, medicine_id, slot, next_dose_status(current, status))


def daily_progress(medicines: Iterable[Medicine], log: DailyLog, day: date) -> float:
    """Percentage of today's scheduled doses marked taken, 0 when none are scheduled."""
    total_doses = 0
    taken_doses = 0
    for medicine in medicines:
        if not medicine.is_active_on(day):
            continue
        medicine_log = log.get(medicine.id, {})
        for slot in medicine.schedule.slots():
            total_doses += 1
            if medicine_log.get(slot) == DoseStatus.TAKEN:
                taken_doses += 1
    if total_doses == 0:
        return 0.0
    return round(taken_doses / total_doses * 100.0, 1)
