"""JobTrack - job application status tracking service."""

import logging
import os
import traceback
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobtrack.core.config import settings
from jobtrack.core.exceptions import ApplicationError, ValidationError
from jobtrack.core.storage import init_models
from jobtrack.models.tracked_application import ApplicationStatus
from jobtrack.routers import jobs_router, tracked_applications_router
from jobtrack.schemas.tracking import ErrorResponse
from jobtrack.services.reminder_service import reminder_service

log_level = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Initializing application...")
    await init_models()

    if settings.reminder_sweep_enabled:
        logger.info("Starting reminder sweep...")
        await reminder_service.start()

    logger.info("Application initialized")

    yield

    logger.info("Shutting down...")
    await reminder_service.stop()
    logger.info("Shutdown complete")


app = FastAPI(
    title="JobTrack",
    description="Job application status tracking",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(tracked_applications_router)
app.include_router(jobs_router)


def _trace_id(request: Request) -> str:
    return request.headers.get("X-Request-ID") or uuid.uuid4().hex


def _error_response(
    status_code: int,
    code: str,
    message: str,
    trace_id: str,
    exc: Exception,
    detail: dict | None = None,
) -> JSONResponse:
    if settings.debug:
        detail = {
            **(detail or {}),
            "stack": "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__)
            ),
        }
    body = ErrorResponse(code=code, message=message, trace_id=trace_id, detail=detail)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers={"X-Request-ID": trace_id},
    )


@app.exception_handler(ApplicationError)
async def application_error_handler(request: Request, exc: ApplicationError):
    """Render domain errors as structured responses."""
    trace_id = _trace_id(request)
    level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logger.log(
        level,
        f"{exc.status_code} - {exc.message} - {request.method} {request.url.path} "
        f"- traceId: {trace_id}",
        exc_info=exc.__cause__ if exc.status_code >= 500 else None,
    )
    response = _error_response(exc.status_code, exc.code, exc.message, trace_id, exc)
    if exc.status_code == 401:
        response.headers["WWW-Authenticate"] = "Bearer"
    return response


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
):
    """Render malformed request bodies and parameters like other validation errors."""
    trace_id = _trace_id(request)
    errors = exc.errors()
    message = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in errors
    )
    logger.warning(
        f"400 - {message} - {request.method} {request.url.path} - traceId: {trace_id}"
    )
    return _error_response(
        ValidationError.status_code,
        ValidationError.code,
        message or "Invalid request",
        trace_id,
        exc,
        detail={"errors": jsonable_encoder(errors)},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    """Anything unexpected is logged in full and reported generically."""
    trace_id = _trace_id(request)
    logger.error(
        f"500 - {exc} - {request.method} {request.url.path} - traceId: {trace_id}",
        exc_info=exc,
    )
    return _error_response(500, "unknown", "Internal server error", trace_id, exc)


@app.get("/api")
async def api_info():
    """API information endpoint."""
    return {
        "message": "JobTrack API",
        "version": "1.0.0",
        "docs": "/docs",
        "status": "active",
        "statuses": [s.value for s in ApplicationStatus],
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "jobtrack",
        "reminders": reminder_service.get_status(),
    }
