from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse
from health_guide.config import get_services
from health_guide.core import (
    ClassificationResponse,
    Demographics,
    DoseToggleRequest,
    EnvelopeResponse,
    SessionResponse,
    StatusResponse,
    SymptomInput,
    SymptomUpdateRequest,
)
from health_guide.core.error_mapping import build_error_payload
from health_guide.sessions import SessionNotFoundError, SymptomContext, SymptomsMissingError
from health_guide.tracker import (
    DailyLog,
    DoseNotScheduledError,
    DoseSlot,
    DoseStatus,
    Medicine,
    MedicineCreate,
    MedicineNotFoundError,
    daily_progress,
    toggle_dose,
)
from health_guide.triage import classify_with_source, encode_data_uri

router = APIRouter()

MAX_PHOTO_BYTES = 10 * 1024 * 1024


def get_app_services():
    return get_services()


@router.get("/", response_model=StatusResponse)
def read_root():
    return {"status": "online", "system": "Swasthya Guide"}


def _classification_payload(symptom_input: SymptomInput, services: dict) -> dict:
    result = classify_with_source(symptom_input, services.get("llm"))
    return {"assessment": result.assessment, "source": result.source}


@router.post("/classify", response_model=ClassificationResponse)
def classify_symptoms(symptom_input: SymptomInput, services: dict = Depends(get_app_services)):
    return _classification_payload(symptom_input, services)


@router.post("/classify/upload", response_model=ClassificationResponse)
def classify_upload(
    description: str = Form(""),
    photo: Optional[UploadFile] = File(None),
    name: Optional[str] = Form(None),
    age: Optional[str] = Form(None),
    weight: Optional[str] = Form(None),
    gender: Optional[str] = Form(None),
    height: Optional[str] = Form(None),
    services: dict = Depends(get_app_services),
):
    photo_uri = None
    if photo is not None:
        data = photo.file.read(MAX_PHOTO_BYTES + 1)
        if len(data) > MAX_PHOTO_BYTES:
            return JSONResponse(
                status_code=413,
                content={
                    "success": False,
                    "data": {},
                    "error": build_error_payload(
                        "PHOTO_TOO_LARGE",
                        f"Photo must be at most {MAX_PHOTO_BYTES // (1024 * 1024)} MB.",
                    ),
                },
            )
        if data:
            photo_uri = encode_data_uri(data, photo.content_type)

    symptom_input = SymptomInput(
        description=description,
        photo=photo_uri,
        demographics=Demographics(
            name=name, age=age, weight=weight, gender=gender, height=height
        ),
    )
    return _classification_payload(symptom_input, services)


# ============= Symptom context =============

def _session_payload(context: SymptomContext) -> dict:
    return {
        "session_id": context.session_id,
        "demographics": context.demographics,
        "has_description": bool(context.description.strip()),
        "has_photo": context.photo is not None,
    }


def _session_not_found(session_id: str) -> dict:
    return {
        "success": False,
        "data": {},
        "error": build_error_payload(
            "SESSION_NOT_FOUND",
            "Session does not exist, has expired or was already used.",
            details=session_id,
        ),
    }


@router.post("/sessions", response_model=SessionResponse)
def create_session(demographics: Demographics, services: dict = Depends(get_app_services)):
    context = services["sessions"].create(demographics)
    return _session_payload(context)


@router.put("/sessions/{session_id}/symptoms", response_model=EnvelopeResponse)
def update_session_symptoms(
    session_id: str,
    request: SymptomUpdateRequest,
    services: dict = Depends(get_app_services),
):
    try:
        context = services["sessions"].update_symptoms(
            session_id,
            description=request.description,
            photo=request.photo,
            demographics=request.demographics,
        )
    except SessionNotFoundError:
        return _session_not_found(session_id)
    return {"success": True, "data": _session_payload(context), "error": None}


@router.post("/sessions/{session_id}/result", response_model=EnvelopeResponse)
def session_result(session_id: str, services: dict = Depends(get_app_services)):
    try:
        symptom_input = services["sessions"].consume(session_id, require_symptoms=True)
    except SessionNotFoundError:
        return _session_not_found(session_id)
    except SymptomsMissingError:
        # Kept so the user can go back and describe the problem.
        return {
            "success": False,
            "data": {},
            "error": build_error_payload(
                "SYMPTOMS_MISSING",
                "No symptoms were provided. Please go back and describe your problem.",
            ),
        }

    payload = _classification_payload(symptom_input, services)
    return {
        "success": True,
        "data": {
            "assessment": payload["assessment"].model_dump(by_alias=True, mode="json"),
            "source": payload["source"],
        },
        "error": None,
    }


@router.delete("/sessions/{session_id}", status_code=204)
def delete_session(session_id: str, services: dict = Depends(get_app_services)):
    services["sessions"].discard(session_id)


# ============= Medicine tracker =============

def _log_payload(log: DailyLog) -> dict:
    return {
        medicine_id: {slot.value: status.value for slot, status in slots.items()}
        for medicine_id, slots in log.items()
    }


@router.post("/users/{user_id}/medicines", response_model=Medicine)
def add_medicine(user_id: str, medicine: MedicineCreate, services: dict = Depends(get_app_services)):
    return services["medicines"].add_medicine(user_id, medicine)


@router.get("/users/{user_id}/medicines", response_model=list[Medicine])
def list_medicines(user_id: str, services: dict = Depends(get_app_services)):
    return services["medicines"].list_medicines(user_id)


@router.get("/users/{user_id}/medicine-log/{day}", response_model=EnvelopeResponse)
def get_medicine_log(user_id: str, day: date, services: dict = Depends(get_app_services)):
    store = services["medicines"]
    log = store.get_log(user_id, day)
    return {
        "success": True,
        "data": {
            "date": day.isoformat(),
            "log": _log_payload(log),
            "progress": daily_progress(store.list_medicines(user_id), log, day),
        },
        "error": None,
    }


@router.post("/users/{user_id}/medicine-log/{day}/toggle", response_model=EnvelopeResponse)
def toggle_medicine_dose(
    user_id: str,
    day: date,
    request: DoseToggleRequest,
    services: dict = Depends(get_app_services),
):
    store = services["medicines"]
    try:
        slot = DoseSlot(request.slot.strip().lower())
        status = DoseStatus(request.status.strip().lower())
    except ValueError as err:
        return {
            "success": False,
            "data": {},
            "error": build_error_payload(
                "DOSE_INPUT_INVALID",
                "Slot must be morning, afternoon or night and status taken or missed.",
                details=str(err),
            ),
        }

    try:
        log = toggle_dose(store, user_id, day, request.medicine_id, slot, status)
    except MedicineNotFoundError:
        return {
            "success": False,
            "data": {},
            "error": build_error_payload(
                "MEDICINE_NOT_FOUND",
                "Medicine does not exist for this user.",
                details=request.medicine_id,
            ),
        }
    except DoseNotScheduledError as err:
        return {
            "success": False,
            "data": {},
            "error": build_error_payload(
                "DOSE_NOT_SCHEDULED",
                "Medicine is not scheduled for this time slot.",
                details=str(err),
            ),
        }

    return {
        "success": True,
        "data": {
            "date": day.isoformat(),
            "log": _log_payload(log),
            "progress": daily_progress(store.list_medicines(user_id), log, day),
        },
        "error": None,
    }
