# Complaint models
from .complaint_models import NewComplaint, ClassificationResult

# Vector store models
from .embedding_models import EmbeddingMetadata, SearchHit

# Pipeline models
from .pipeline_models import SubmissionState

# Request/Response models
from .request_models import *
from .response_models import *

__all__ = [
    "NewComplaint",
    "ClassificationResult",
    "EmbeddingMetadata",
    "SearchHit",
    "SubmissionState",
    "ClassifyRequest",
    "ExtractTextRequest",
    "SimilaritySearchRequest",
    "TranscriptionResponse",
    "ListComplaintsResponse",
    "ComplaintsViewResponse",
    "PersistOutcome",
]
