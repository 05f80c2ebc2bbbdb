from typing import Callable, TYPE_CHECKING
import logging
from langsmith import traceable
from complaint_backend.models.complaint_models import NewComplaint
from complaint_backend.services.persistence_service import ComplaintPersistenceService

if TYPE_CHECKING:
    from complaint_backend.models.pipeline_models import SubmissionState

logger = logging.getLogger(__name__)

def make_persist_complaint_node(persistence: ComplaintPersistenceService) -> Callable[['SubmissionState'], 'SubmissionState']:

    @traceable(name="persist_complaint")
    def persist_complaint_node(state: 'SubmissionState') -> 'SubmissionState':
        """
        Store the classified complaint; the summary is what gets stored as complaint text
        """
        classification = state["classification"]
        complaint = NewComplaint(
            company=state["company"],
            complaint=classification["summary"],
            productCategory=classification["category"],
            productSubcategory=classification["subcategory"],
            isComplaint=classification["isComplaint"],
        )

        outcome = persistence.persist(complaint)
        state["persist_outcome"] = outcome.to_response()

        if not outcome.succeeded:
            state["error"] = outcome.error.get("message") or "Complaint insert failed"
            state["error_type"] = outcome.error.get("type") or "store_write_error"
            state["pipeline_step"] = "error"
            return state

        state["pipeline_step"] = "complaint_persisted"
        logger.info(f"Persisted complaint for company {state['company']!r}")
        return state

    return persist_complaint_node
