from datetime import date, timedelta

import pytest
from pydantic import ValidationError

from health_guide.tracker import (
    DoseNotScheduledError,
    DoseSlot,
    DoseStatus,
    InMemoryMedicineStore,
    MedicineCreate,
    MedicineNotFoundError,
    MedicineSchedule,
    daily_progress,
    next_dose_status,
    toggle_dose,
)

TODAY = date(2026, 3, 10)


def _medicine(name: str = "Paracetamol", **schedule) -> MedicineCreate:
    return MedicineCreate(
        name=name,
        dosage="1 tablet",
        schedule=MedicineSchedule(**schedule),
        start_date=TODAY,
        is_ongoing=True,
    )


def test_schedule_requires_at_least_one_slot():
    with pytest.raises(ValidationError):
        MedicineSchedule()


def test_end_date_before_start_is_rejected():
    with pytest.raises(ValidationError):
        MedicineCreate(
            name="Amoxicillin",
            dosage="5ml",
            schedule={"morning": True},
            start_date=TODAY,
            end_date=TODAY - timedelta(days=1),
        )


def test_ongoing_medicine_has_no_end_date():
    medicine = MedicineCreate(
        name="Metformin",
        dosage="500mg",
        schedule={"night": True},
        start_date=TODAY,
        end_date=TODAY + timedelta(days=5),
        is_ongoing=True,
    )

    assert medicine.end_date is None


def test_blank_name_is_rejected():
    with pytest.raises(ValidationError):
        _medicine(name="   ", morning=True)


@pytest.mark.parametrize(
    ("current", "requested", "expected"),
    [
        (None, DoseStatus.TAKEN, DoseStatus.TAKEN),
        (DoseStatus.TAKEN, DoseStatus.TAKEN, None),
        (DoseStatus.TAKEN, DoseStatus.MISSED, DoseStatus.MISSED),
        (DoseStatus.MISSED, DoseStatus.MISSED, None),
    ],
)
def test_next_dose_status(current, requested, expected):
    assert next_dose_status(current, requested) == expected


def test_toggle_same_status_twice_clears_slot():
    store = InMemoryMedicineStore()
    medicine = store.add_medicine("user-1", _medicine(morning=True))

    log = toggle_dose(store, "user-1", TODAY, medicine.id, DoseSlot.MORNING, DoseStatus.TAKEN)
    assert log[medicine.id][DoseSlot.MORNING] is DoseStatus.TAKEN

    log = toggle_dose(store, "user-1", TODAY, medicine.id, DoseSlot.MORNING, DoseStatus.TAKEN)
    assert medicine.id not in log


def test_toggle_unknown_medicine_raises():
    store = InMemoryMedicineStore()

    with pytest.raises(MedicineNotFoundError):
        toggle_dose(store, "user-1", TODAY, "missing", DoseSlot.MORNING, DoseStatus.TAKEN)


def test_toggle_unscheduled_slot_raises():
    store = InMemoryMedicineStore()
    medicine = store.add_medicine("user-1", _medicine(morning=True))

    with pytest.raises(DoseNotScheduledError):
        toggle_dose(store, "user-1", TODAY, medicine.id, DoseSlot.NIGHT, DoseStatus.TAKEN)


def test_medicines_and_logs_are_scoped_per_user_and_day():
    store = InMemoryMedicineStore()
    medicine = store.add_medicine("user-1", _medicine(morning=True))
    toggle_dose(store, "user-1", TODAY, medicine.id, DoseSlot.MORNING, DoseStatus.TAKEN)

    assert store.list_medicines("user-2") == []
    assert store.get_log("user-1", TODAY + timedelta(days=1)) == {}
    with pytest.raises(MedicineNotFoundError):
        store.get_medicine("user-2", medicine.id)


def test_daily_progress_counts_taken_over_scheduled():
    store = InMemoryMedicineStore()
    first = store.add_medicine("user-1", _medicine("A", morning=True, night=True))
    second = store.add_medicine("user-1", _medicine("B", afternoon=True))
    toggle_dose(store, "user-1", TODAY, first.id, DoseSlot.MORNING, DoseStatus.TAKEN)
    toggle_dose(store, "user-1", TODAY, first.id, DoseSlot.NIGHT, DoseStatus.MISSED)
    toggle_dose(store, "user-1", TODAY, second.id, DoseSlot.AFTERNOON, DoseStatus.TAKEN)

    progress = daily_progress(store.list_medicines("user-1"), store.get_log("user-1", TODAY), TODAY)

    assert progress == 66.7


def test_daily_progress_skips_inactive_medicines():
    store = InMemoryMedicineStore()
    active = store.add_medicine("user-1", _medicine("A", morning=True))
    store.add_medicine(
        "user-1",
        MedicineCreate(
            name="B",
            dosage="1 tablet",
            schedule={"morning": True},
            start_date=TODAY + timedelta(days=1),
        ),
    )
    toggle_dose(store, "user-1", TODAY, active.id, DoseSlot.MORNING, DoseStatus.TAKEN)

    progress = daily_progress(store.list_medicines("user-1"), store.get_log("user-1", TODAY), TODAY)

    assert progress == 100.0


def test_daily_progress_without_schedule_is_zero():
    assert daily_progress([], {}, TODAY) == 0.0
