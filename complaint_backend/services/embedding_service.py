from typing import Any, List
import logging

import numpy as np
from langchain_google_genai import GoogleGenerativeAIEmbeddings

from complaint_backend.errors import ResponseParseError, UpstreamServiceError

logger = logging.getLogger(__name__)


class EmbeddingService:
    """
    Single embedding function shared by the write path and the query path,
    so stored and query vectors always come from the same model.
    """

    def __init__(self, embeddings: Any, dimensions: int = 768):
        self.embeddings = embeddings
        self.dimensions = dimensions

    @classmethod
    def from_settings(cls, settings) -> "EmbeddingService":
        embeddings = GoogleGenerativeAIEmbeddings(
            model=settings.embedding_model,
            google_api_key=settings.google_api_key,
            request_options={"timeout": settings.request_timeout_seconds},
        )
        return cls(embeddings, settings.embedding_dimensions)

    def _validate(self, vector: Any) -> List[float]:
        try:
            array = np.asarray(vector, dtype=float)
        except (TypeError, ValueError) as e:
            raise ResponseParseError(f"Embedding is not numeric: {str(e)}", service="embeddings") from e

        if array.ndim != 1 or array.shape[0] != self.dimensions:
            raise ResponseParseError(
                f"Embedding has shape {array.shape}, expected ({self.dimensions},)",
                service="embeddings",
            )
        if not np.all(np.isfinite(array)):
            raise ResponseParseError("Embedding contains non-finite values", service="embeddings")

        return array.tolist()

    def embed_documents(self, texts: List[str]) -> List[List[float]]:
        """Embed a batch of complaint texts, one vector per text in input order"""
        try:
            vectors = self.embeddings.embed_documents(texts)
        except Exception as e:
            logger.error(f"Embedding request failed: {str(e)}")
            raise UpstreamServiceError(f"Error generating embedding: {str(e)}", service="embeddings") from e

        if not vectors or len(vectors) != len(texts):
            raise ResponseParseError(
                f"Embeddings API returned {len(vectors or [])} vectors for {len(texts)} texts",
                service="embeddings",
            )
        return [self._validate(vector) for vector in vectors]

    def embed_document(self, text: str) -> List[float]:
        return self.embed_documents([text])[0]

    def embed_query(self, text: str) -> List[float]:
        try:
            vector = self.embeddings.embed_query(text)
        except Exception as e:
            logger.error(f"Query embedding request failed: {str(e)}")
            raise UpstreamServiceError(f"Error generating embedding: {str(e)}", service="embeddings") from e

        return self._validate(vector)
