from fastapi import APIRouter, Depends
import logging

from complaint_backend.api.dependencies import ServiceContainer, get_services
from complaint_backend.errors import InputValidationError
from complaint_backend.models.request_models import ClassifyRequest

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/classify")
def classify_complaint(request: ClassifyRequest, services: ServiceContainer = Depends(get_services)):
    """
    Detect whether the text is a complaint, summarize it and assign categories
    """
    if not request.query or not request.query.strip():
        raise InputValidationError("Query is required")

    result = services.classifier.classify(request.query)
    return result.to_response()
