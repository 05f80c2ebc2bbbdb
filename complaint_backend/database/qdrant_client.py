from typing import List, Dict, Any, Optional, Tuple
import logging
import uuid

from qdrant_client import QdrantClient
from qdrant_client.http import models

from complaint_backend.errors import StoreReadError, StoreWriteError

logger = logging.getLogger(__name__)


class QdrantVectorClient:
    """
    Client for interacting with the Qdrant vector database
    Handles complaint embeddings and similarity search

    Points are stored with a langchain-style payload:
    {"page_content": <complaint text>, "metadata": {...}}
    """

    def __init__(self, client: QdrantClient, collection_name: str = "complaints_vector_db",
                 vector_size: int = 768):
        self.client = client
        self.collection_name = collection_name
        self.vector_size = vector_size

    @classmethod
    def from_url(cls, url: str, api_key: Optional[str] = None,
                 collection_name: str = "complaints_vector_db",
                 vector_size: int = 768,
                 timeout_seconds: Optional[float] = None) -> "QdrantVectorClient":
        client_kwargs: Dict[str, Any] = {"url": url, "api_key": api_key}
        if timeout_seconds:
            client_kwargs["timeout"] = int(timeout_seconds)
        return cls(QdrantClient(**client_kwargs), collection_name, vector_size)

    def ensure_collection(self) -> None:
        """
        Create the complaints collection if it does not exist yet
        """
        if self.client.collection_exists(self.collection_name):
            logger.info(f"Qdrant collection '{self.collection_name}' already exists")
            return

        self.client.create_collection(
            collection_name=self.collection_name,
            vectors_config=models.VectorParams(
                size=self.vector_size,
                distance=models.Distance.COSINE,
            ),
        )
        logger.info(f"Created Qdrant collection '{self.collection_name}' (size={self.vector_size})")

    def upsert_entry(self, text: str, metadata: Dict[str, Any], vector: List[float]) -> str:
        """
        Upsert one embedding entry and return its point id
        """
        return self.upsert_entries([(text, metadata, vector)])[0]

    def upsert_entries(self, entries: List[Tuple[str, Dict[str, Any], List[float]]]) -> List[str]:
        """
        Upsert (text, metadata, vector) entries in one request, returning point ids in input order
        """
        points = [
            models.PointStruct(
                id=str(uuid.uuid4()),
                vector=vector,
                payload={"page_content": text, "metadata": metadata},
            )
            for text, metadata, vector in entries
        ]
        try:
            self.client.upsert(collection_name=self.collection_name, points=points)
        except Exception as e:
            logger.error(f"Error upserting embeddings into Qdrant: {str(e)}")
            raise StoreWriteError(str(e), service="qdrant") from e

        logger.info(f"Upserted {len(points)} embedding(s) into '{self.collection_name}'")
        return [str(point.id) for point in points]

    def vector_similarity_search(self, query_embedding: List[float],
                                 limit: int = 5) -> List[Dict[str, Any]]:
        """
        Nearest-neighbour search, results in Qdrant's relevance order
        (descending cosine similarity). No score threshold is applied.
        """
        try:
            response = self.client.query_points(
                collection_name=self.collection_name,
                query=query_embedding,
                limit=limit,
                with_payload=True,
            )
        except Exception as e:
            logger.error(f"Error in Qdrant vector similarity search: {str(e)}")
            raise StoreReadError(str(e), service="qdrant") from e

        results = []
        for point in response.points:
            payload = point.payload or {}
            results.append({
                "page_content": payload.get("page_content", ""),
                "metadata": payload.get("metadata", {}),
                "similarity": float(point.score),
            })

        logger.info(f"Found {len(results)} similar complaints in Qdrant")
        return results

