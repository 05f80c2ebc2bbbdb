from fastapi import APIRouter, Depends, Query
import logging

from complaint_backend.api.dependencies import ServiceContainer, get_services
from complaint_backend.models.complaint_models import NewComplaint
from complaint_backend.models.response_models import ComplaintsViewResponse, ListComplaintsResponse

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/persist-complaint")
def persist_complaint(complaint: NewComplaint, services: ServiceContainer = Depends(get_services)):
    """
    Add a complaint to the complaints table and its embedding to the vector store.
    Returns {data} or {error}; a vector store failure is reported as vectorError.
    """
    outcome = services.persistence.persist(complaint)
    return outcome.to_response()

@router.api_route("/list-complaints", methods=["GET", "POST"], response_model=ListComplaintsResponse)
def list_complaints(services: ServiceContainer = Depends(get_services)):
    """
    Return every stored complaint, unfiltered
    """
    return ListComplaintsResponse(complaints=services.listing.list_complaints())

@router.get("/complaints-view", response_model=ComplaintsViewResponse)
def complaints_view(
    sort: str = Query("date_desc", description="date_desc, date_asc or company"),
    only_non_complaints: bool = Query(False, alias="onlyNonComplaints",
                                      description="Only rows not classified as complaints"),
    page: int = Query(1, description="Page number, starting at 1"),
    services: ServiceContainer = Depends(get_services),
):
    """
    Dashboard view: sorted, optionally filtered, fixed-size page of complaints
    """
    result = services.listing.view(sort=sort, only_non_complaints=only_non_complaints, page=page)
    return ComplaintsViewResponse(
        complaints=result.complaints,
        page=result.page,
        totalPages=result.total_pages,
        total=result.total,
    )
