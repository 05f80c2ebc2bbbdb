from typing import Callable, TYPE_CHECKING
import logging
from langsmith import traceable
from complaint_backend.errors import ComplaintServiceError
from complaint_backend.services.input_normalizer import InputNormalizer

if TYPE_CHECKING:
    from complaint_backend.models.pipeline_models import SubmissionState

logger = logging.getLogger(__name__)

def make_normalize_input_node(normalizer: InputNormalizer) -> Callable[['SubmissionState'], 'SubmissionState']:

    @traceable(name="normalize_input")
    def normalize_input_node(state: 'SubmissionState') -> 'SubmissionState':
        """
        Turn the submitted text, audio or image into complaint text
        """
        try:
            normalized = normalizer.normalize(
                text=state.get("query"),
                audio=state.get("audio"),
                image_data_url=state.get("image_data_url"),
            )
            state["text"] = normalized.text
            state["input_source"] = normalized.source
            state["pipeline_step"] = "input_normalized"

            logger.info(f"Input normalized from {normalized.source}: {len(normalized.text)} characters")
            return state

        except ComplaintServiceError as e:
            logger.error(f"Error in normalize_input_node ({e.error_type}): {str(e)}")
            state["error"] = e.message
            state["error_type"] = e.error_type
            state["pipeline_step"] = "error"
            return state

    return normalize_input_node
