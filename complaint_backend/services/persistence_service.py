from typing import Any, Dict, List, Optional
import logging

from complaint_backend.database.qdrant_client import QdrantVectorClient
from complaint_backend.database.supabase_client import SupabaseComplaintStore
from complaint_backend.errors import ComplaintServiceError, StoreWriteError
from complaint_backend.models.complaint_models import NewComplaint
from complaint_backend.models.embedding_models import EmbeddingMetadata
from complaint_backend.models.response_models import PersistOutcome
from complaint_backend.services.embedding_service import EmbeddingService

logger = logging.getLogger(__name__)


class ComplaintPersistenceService:
    """
    Writes a classified complaint to the relational store and, independently,
    its embedding to the vector store.

    There is no transaction spanning the two stores: either write may fail
    while the other succeeds, and nothing compensates for it.
    """

    def __init__(self, complaint_store: SupabaseComplaintStore,
                 vector_client: QdrantVectorClient,
                 embedding_service: EmbeddingService):
        self.complaint_store = complaint_store
        self.vector_client = vector_client
        self.embedding_service = embedding_service

    def persist(self, complaint: NewComplaint) -> PersistOutcome:
        outcome = PersistOutcome()
        inserted: List[Dict[str, Any]] = []

        # Step 1: relational insert
        try:
            inserted = self.complaint_store.insert_complaint(complaint.to_row())
            outcome.data = inserted
        except StoreWriteError as e:
            logger.error(f"Complaint insert failed for company {complaint.company!r}: {e}")
            outcome.error = e.to_dict()

        # Step 2: vector upsert, attempted whatever step 1 did
        date_created = self._created_at(inserted)
        try:
            self.upsert_embedding(complaint, date_created)
        except ComplaintServiceError as e:
            logger.error(
                f"Embedding upsert failed for company {complaint.company!r} "
                f"(insert {'failed' if outcome.error else 'succeeded'}): {e}"
            )
            outcome.vector_error = e.to_dict()

        if outcome.error is None and outcome.vector_error is not None:
            logger.warning("Complaint stored without an embedding, stores have diverged")
        elif outcome.error is not None and outcome.vector_error is None:
            logger.warning("Embedding stored without a complaint row, stores have diverged")

        return outcome

    def persist_batch(self, complaints: List[NewComplaint],
                      dates_created: List[Optional[str]]) -> PersistOutcome:
        """
        Dataset import: one insert and one embedding upsert for the whole batch.
        dateCreated comes from the source records, not from the inserted rows.
        Same independence between the two writes as persist().
        """
        outcome = PersistOutcome()

        try:
            outcome.data = self.complaint_store.insert_complaints([c.to_row() for c in complaints])
        except StoreWriteError as e:
            logger.error(f"Batch insert of {len(complaints)} complaints failed: {e}")
            outcome.error = e.to_dict()

        try:
            vectors = self.embedding_service.embed_documents([c.complaint for c in complaints])
            self.vector_client.upsert_entries([
                (complaint.complaint, self._metadata(complaint, date_created).to_payload(), vector)
                for complaint, date_created, vector in zip(complaints, dates_created, vectors)
            ])
        except ComplaintServiceError as e:
            logger.error(f"Batch embedding upsert of {len(complaints)} complaints failed: {e}")
            outcome.vector_error = e.to_dict()

        return outcome

    def upsert_embedding(self, complaint: NewComplaint, date_created: Optional[str] = None) -> str:
        metadata = self._metadata(complaint, date_created)
        vector = self.embedding_service.embed_document(complaint.complaint)
        return self.vector_client.upsert_entry(complaint.complaint, metadata.to_payload(), vector)

    @staticmethod
    def _metadata(complaint: NewComplaint, date_created: Optional[str]) -> EmbeddingMetadata:
        return EmbeddingMetadata(
            company=complaint.company,
            productCategory=complaint.product_category,
            subProductCategory=complaint.product_subcategory,
            dateCreated=date_created,
        )

    @staticmethod
    def _created_at(inserted: List[Dict[str, Any]]) -> Optional[str]:
        if inserted and isinstance(inserted[0], dict) and inserted[0].get("created_at"):
            return str(inserted[0]["created_at"])
        return None
