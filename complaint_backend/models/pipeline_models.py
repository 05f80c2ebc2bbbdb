from typing import Any, Dict, Optional
from typing_extensions import TypedDict


class SubmissionState(TypedDict, total=False):
    """
    State object for the complaint submission pipeline
    Compatible with LangGraph's state handling
    """
    # Input
    company: str
    query: Optional[str]
    audio: Optional[Any]  # AudioUpload
    image_data_url: Optional[str]

    # Pipeline data
    text: Optional[str]
    input_source: Optional[str]  # "text", "audio" or "image"
    classification: Optional[Dict[str, Any]]
    persist_outcome: Optional[Dict[str, Any]]

    # Pipeline metadata
    pipeline_step: str
    error: Optional[str]
    error_type: Optional[str]
    execution_time: Optional[float]
