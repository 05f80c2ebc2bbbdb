from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import logging

from complaint_backend.api.dependencies import ServiceContainer
from complaint_backend.api.routes import classify, complaints, media, search, submission
from complaint_backend.errors import (
    ComplaintServiceError,
    InputValidationError,
    ResponseParseError,
    StoreReadError,
    StoreWriteError,
    UpstreamServiceError,
)

logger = logging.getLogger(__name__)


def _status_for(error: ComplaintServiceError) -> int:
    if isinstance(error, InputValidationError):
        return 400
    if isinstance(error, (UpstreamServiceError, ResponseParseError, StoreReadError, StoreWriteError)):
        return 502
    return 500


async def complaint_service_error_handler(request: Request, exc: ComplaintServiceError) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} failed ({exc.error_type}, service={exc.service}): {exc.message}")
    return JSONResponse(status_code=_status_for(exc), content={"error": exc.message})


def create_app(services: ServiceContainer) -> FastAPI:
    app = FastAPI(title="Complaint Intake Service", version="1.0.0")
    app.state.services = services

    app.add_exception_handler(ComplaintServiceError, complaint_service_error_handler)

    app.include_router(classify.router, tags=["classify"])
    app.include_router(media.router, tags=["media"])
    app.include_router(complaints.router, tags=["complaints"])
    app.include_router(search.router, tags=["search"])
    app.include_router(submission.router, tags=["submission"])

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    return app
