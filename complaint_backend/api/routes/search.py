from fastapi import APIRouter, Depends

from complaint_backend.api.dependencies import ServiceContainer, get_services
from complaint_backend.models.request_models import SimilaritySearchRequest

router = APIRouter()

@router.post("/similarity-search")
def similarity_search(request: SimilaritySearchRequest, services: ServiceContainer = Depends(get_services)):
    """
    Find the topK stored complaints most similar to the query
    """
    hits = services.search.search(request.query, request.top_k)
    return [hit.to_response() for hit in hits]
