from typing import Callable, TYPE_CHECKING
import logging
from langsmith import traceable
from complaint_backend.errors import ComplaintServiceError
from complaint_backend.services.classifier_service import ComplaintClassifier

if TYPE_CHECKING:
    from complaint_backend.models.pipeline_models import SubmissionState

logger = logging.getLogger(__name__)

def make_classify_complaint_node(classifier: ComplaintClassifier) -> Callable[['SubmissionState'], 'SubmissionState']:

    @traceable(name="classify_complaint")
    def classify_complaint_node(state: 'SubmissionState') -> 'SubmissionState':
        """
        Classify the normalized text; the classifier also updates the category registry
        """
        try:
            result = classifier.classify(state["text"])
            state["classification"] = result.to_response()
            state["pipeline_step"] = "complaint_classified"
            return state

        except ComplaintServiceError as e:
            logger.error(f"Error in classify_complaint_node ({e.error_type}): {str(e)}")
            state["error"] = e.message
            state["error_type"] = e.error_type
            state["pipeline_step"] = "error"
            return state

    return classify_complaint_node
