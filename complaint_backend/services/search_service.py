from typing import List
import logging

# LangSmith tracing
from langsmith import traceable

from complaint_backend.database.qdrant_client import QdrantVectorClient
from complaint_backend.errors import InputValidationError
from complaint_backend.models.embedding_models import SearchHit
from complaint_backend.services.embedding_service import EmbeddingService

logger = logging.getLogger(__name__)


class SimilaritySearchService:
    """
    Embeds a free-text query with the write-time embedding function and
    returns the top-K nearest complaints in the vector store's order
    """

    def __init__(self, vector_client: QdrantVectorClient, embedding_service: EmbeddingService):
        self.vector_client = vector_client
        self.embedding_service = embedding_service

    @traceable(name="similarity_search")
    def search(self, query: str, top_k: int) -> List[SearchHit]:
        if not query or not query.strip():
            raise InputValidationError("Query is required")
        if top_k < 1:
            raise InputValidationError("topK must be at least 1")

        query_embedding = self.embedding_service.embed_query(query)
        results = self.vector_client.vector_similarity_search(query_embedding, limit=top_k)

        logger.info(f"Similarity search for {query!r} returned {len(results)} results (topK={top_k})")
        return [
            SearchHit(pageContent=r["page_content"], metadata=r["metadata"], score=r["similarity"])
            for r in results
        ]
