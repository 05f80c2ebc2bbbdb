# Service container shared by all routes
from dataclasses import dataclass
import logging

from fastapi import Request

from complaint_backend.config import Settings
from complaint_backend.database.qdrant_client import QdrantVectorClient
from complaint_backend.database.supabase_client import SupabaseComplaintStore
from complaint_backend.pipelines.orchestrator import SubmissionOrchestrator
from complaint_backend.services.category_registry import CategoryRegistry
from complaint_backend.services.classifier_service import ComplaintClassifier
from complaint_backend.services.embedding_service import EmbeddingService
from complaint_backend.services.input_normalizer import InputNormalizer
from complaint_backend.services.listing_service import ComplaintListingService
from complaint_backend.services.ocr_service import OcrSpaceClient
from complaint_backend.services.persistence_service import ComplaintPersistenceService
from complaint_backend.services.search_service import SimilaritySearchService
from complaint_backend.services.transcription_service import SpeechToTextClient

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    registry: CategoryRegistry
    classifier: ComplaintClassifier
    transcriber: SpeechToTextClient
    ocr: OcrSpaceClient
    normalizer: InputNormalizer
    persistence: ComplaintPersistenceService
    search: SimilaritySearchService
    listing: ComplaintListingService
    orchestrator: SubmissionOrchestrator


def assemble_services(registry: CategoryRegistry,
                      classifier: ComplaintClassifier,
                      transcriber: SpeechToTextClient,
                      ocr: OcrSpaceClient,
                      complaint_store: SupabaseComplaintStore,
                      vector_client: QdrantVectorClient,
                      embedding_service: EmbeddingService) -> ServiceContainer:
    """Wire services from already constructed collaborators"""
    normalizer = InputNormalizer(transcriber, ocr)
    persistence = ComplaintPersistenceService(complaint_store, vector_client, embedding_service)
    return ServiceContainer(
        registry=registry,
        classifier=classifier,
        transcriber=transcriber,
        ocr=ocr,
        normalizer=normalizer,
        persistence=persistence,
        search=SimilaritySearchService(vector_client, embedding_service),
        listing=ComplaintListingService(complaint_store),
        orchestrator=SubmissionOrchestrator(normalizer, classifier, persistence),
    )


def build_persistence(settings: Settings) -> ComplaintPersistenceService:
    """Create both stores and the embedding client; also used by the dataset import"""
    timeout = settings.request_timeout_seconds
    complaint_store = SupabaseComplaintStore.from_credentials(
        settings.supabase_url,
        settings.supabase_service_key,
        table_name=settings.complaints_table,
        timeout_seconds=timeout,
    )
    vector_client = QdrantVectorClient.from_url(
        settings.qdrant_url,
        api_key=settings.qdrant_api_key,
        collection_name=settings.qdrant_collection,
        vector_size=settings.embedding_dimensions,
        timeout_seconds=timeout,
    )
    vector_client.ensure_collection()
    return ComplaintPersistenceService(complaint_store, vector_client, EmbeddingService.from_settings(settings))


def build_services(settings: Settings) -> ServiceContainer:
    """Create the real external clients from settings"""
    timeout = settings.request_timeout_seconds
    registry = CategoryRegistry()
    persistence = build_persistence(settings)

    services = assemble_services(
        registry=registry,
        classifier=ComplaintClassifier.from_settings(settings, registry),
        transcriber=SpeechToTextClient(
            settings.stt_api_key,
            api_url=settings.stt_api_url,
            model=settings.stt_model,
            timeout_seconds=timeout,
        ),
        ocr=OcrSpaceClient(
            settings.ocr_api_key,
            api_url=settings.ocr_api_url,
            language=settings.ocr_language,
            ocr_engine=settings.ocr_engine,
            timeout_seconds=timeout,
        ),
        complaint_store=persistence.complaint_store,
        vector_client=persistence.vector_client,
        embedding_service=persistence.embedding_service,
    )
    logger.info("Complaint services initialized")
    return services


def get_services(request: Request) -> ServiceContainer:
    return request.app.state.services
