from typing import Any, Dict, Optional
from datetime import datetime
import logging
from langgraph.graph import StateGraph, END

# LangSmith tracing
from langsmith import traceable

from complaint_backend.models.pipeline_models import SubmissionState
from complaint_backend.pipelines.normalize_input_node import make_normalize_input_node
from complaint_backend.pipelines.classify_complaint_node import make_classify_complaint_node
from complaint_backend.pipelines.persist_complaint_node import make_persist_complaint_node
from complaint_backend.services.classifier_service import ComplaintClassifier
from complaint_backend.services.input_normalizer import InputNormalizer
from complaint_backend.services.persistence_service import ComplaintPersistenceService
from complaint_backend.services.transcription_service import AudioUpload

logger = logging.getLogger(__name__)


def _stop_on_error(next_node: str):
    def route(state: SubmissionState) -> str:
        return END if state.get("error") else next_node
    return route


class SubmissionOrchestrator:
    """
    Orchestrator for one complaint submission:
    1. Normalize input (text / transcription / OCR)
    2. Classify complaint (LLM + category registry update)
    3. Persist complaint (relational row + vector embedding)

    Each stage needs the previous stage's output; the graph stops at the
    first stage that records an error.
    """

    def __init__(self, normalizer: InputNormalizer,
                 classifier: ComplaintClassifier,
                 persistence: ComplaintPersistenceService):
        self.normalizer = normalizer
        self.classifier = classifier
        self.persistence = persistence
        self.graph = self._build_graph()

    def _build_graph(self):
        """Build the LangGraph submission workflow"""
        workflow = StateGraph(SubmissionState)

        workflow.add_node("normalize_input", make_normalize_input_node(self.normalizer))
        workflow.add_node("classify_complaint", make_classify_complaint_node(self.classifier))
        workflow.add_node("persist_complaint", make_persist_complaint_node(self.persistence))

        workflow.set_entry_point("normalize_input")
        workflow.add_conditional_edges("normalize_input", _stop_on_error("classify_complaint"))
        workflow.add_conditional_edges("classify_complaint", _stop_on_error("persist_complaint"))
        workflow.add_edge("persist_complaint", END)

        graph = workflow.compile()
        logger.info("Submission LangGraph workflow compiled successfully")
        return graph

    @traceable(name="complaint_submission_pipeline")
    def submit(self, company: str, query: Optional[str] = None,
               audio: Optional[AudioUpload] = None,
               image_data_url: Optional[str] = None) -> Dict[str, Any]:
        """
        Main entry point for processing one submission
        """
        start_time = datetime.utcnow()

        initial_state: SubmissionState = {
            "company": company,
            "query": query,
            "audio": audio,
            "image_data_url": image_data_url,
            "text": None,
            "input_source": None,
            "classification": None,
            "persist_outcome": None,
            "pipeline_step": "initialized",
            "error": None,
            "error_type": None,
            "execution_time": None,
        }

        result = self.graph.invoke(initial_state)

        execution_time = (datetime.utcnow() - start_time).total_seconds()
        result["execution_time"] = execution_time

        logger.info(
            f"Submission pipeline for {company!r} finished at step "
            f"{result.get('pipeline_step')} in {execution_time:.2f}s"
        )
        return result
