import uuid
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from health_guide.config import get_services
from health_guide.core.logging_utils import clear_log_context, log_event, set_request_id

load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    log_event(component="app", event="startup")
    get_services()  # Trigger loading
    yield
    log_event(component="app", event="shutdown")


async def request_id_middleware(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
    set_request_id(request_id)
    request.state.request_id = request_id
    try:
        response = await call_next(request)
    finally:
        clear_log_context()
    response.headers["x-request-id"] = request_id
    return response


def create_app() -> FastAPI:
    app = FastAPI(
        title="Swasthya Guide API",
        description="AI-assisted symptom guidance with a keyword fallback",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production, specify the frontend origin
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(request_id_middleware)

    return app
