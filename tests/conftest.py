"""
Shared fixtures: small fakes for the LLM, embeddings, Supabase, OCR and
speech-to-text collaborators, plus an in-memory Qdrant instance.
"""

import json
import re
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from langchain_core.messages import AIMessage
from postgrest.exceptions import APIError
from qdrant_client import QdrantClient

from complaint_backend.api.app import create_app
from complaint_backend.api.dependencies import assemble_services
from complaint_backend.database.qdrant_client import QdrantVectorClient
from complaint_backend.database.supabase_client import SupabaseComplaintStore
from complaint_backend.services.category_registry import CategoryRegistry
from complaint_backend.services.classifier_service import ComplaintClassifier
from complaint_backend.services.embedding_service import EmbeddingService

VOCABULARY = ["duplicate", "charge", "card", "loan", "mortgage", "fee", "late", "bank"]
EMBEDDING_DIM = len(VOCABULARY) + 1


class FakeChatModel:
    """Returns queued responses and records every message list it receives"""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []

    def queue(self, response):
        self.responses.append(response)

    def invoke(self, messages):
        self.calls.append(messages)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return AIMessage(content=response)


class KeywordEmbeddings:
    """Bag-of-words vectors over a tiny vocabulary, plus a constant bias dimension"""

    def __init__(self):
        self.document_calls = []
        self.query_calls = []

    @staticmethod
    def _vector(text):
        words = re.findall(r"[a-z]+", text.lower())
        return [float(words.count(term)) for term in VOCABULARY] + [0.01]

    def embed_documents(self, texts):
        self.document_calls.extend(texts)
        return [self._vector(text) for text in texts]

    def embed_query(self, text):
        self.query_calls.append(text)
        return self._vector(text)


class _FakeResponse:
    def __init__(self, data):
        self.data = data


class _FakeQuery:
    def __init__(self, table, action, rows=None):
        self.table = table
        self.action = action
        self.rows = rows

    def execute(self):
        if self.table.error is not None:
            raise APIError(self.table.error)
        if self.action == "insert":
            inserted = []
            for row in self.rows:
                stored = dict(row)
                self.table.next_id += 1
                stored["id"] = self.table.next_id
                stored["created_at"] = (
                    self.table.base_time + timedelta(minutes=self.table.next_id)
                ).isoformat()
                self.table.rows.append(stored)
                inserted.append(stored)
            return _FakeResponse(inserted)
        return _FakeResponse([dict(row) for row in self.table.rows])


class FakeTable:
    def __init__(self):
        self.rows = []
        self.insert_calls = []
        self.error = None
        self.next_id = 0
        self.base_time = datetime(2024, 8, 1, tzinfo=timezone.utc)

    def insert(self, rows):
        self.insert_calls.append(rows)
        return _FakeQuery(self, "insert", rows)

    def select(self, columns="*"):
        return _FakeQuery(self, "select")


class FakeSupabase:
    """Minimal stand-in for supabase.Client's table().insert()/select().execute() chain"""

    def __init__(self):
        self.tables = {}

    def table(self, name):
        return self.tables.setdefault(name, FakeTable())


class FakeTranscriber:
    def __init__(self, text="transcribed complaint"):
        self.text = text
        self.calls = []

    def transcribe(self, audio):
        self.calls.append(audio)
        return self.text


class FakeOcr:
    def __init__(self, text="extracted complaint"):
        self.text = text
        self.calls = []

    def parse_image(self, base64_image):
        self.calls.append(base64_image)
        return {"ParsedResults": [{"ParsedText": self.text}], "IsErroredOnProcessing": False}

    def extract_text(self, base64_image):
        self.calls.append(base64_image)
        return self.text


def classification_json(is_complaint=True, summary="Card charged twice",
                        category="Credit card", subcategory="Store credit card"):
    return json.dumps({
        "isComplaint": is_complaint,
        "summary": summary,
        "category": category,
        "subcategory": subcategory,
    })


@pytest.fixture
def registry():
    return CategoryRegistry()


@pytest.fixture
def chat_model():
    return FakeChatModel()


@pytest.fixture
def embeddings():
    return KeywordEmbeddings()


@pytest.fixture
def embedding_service(embeddings):
    return EmbeddingService(embeddings, dimensions=EMBEDDING_DIM)


@pytest.fixture
def supabase():
    return FakeSupabase()


@pytest.fixture
def complaints_table(supabase):
    return supabase.table("complaints")


@pytest.fixture
def complaint_store(supabase):
    return SupabaseComplaintStore(supabase, "complaints")


@pytest.fixture
def vector_client():
    client = QdrantVectorClient(QdrantClient(":memory:"), "test_complaints", EMBEDDING_DIM)
    client.ensure_collection()
    return client


@pytest.fixture
def transcriber():
    return FakeTranscriber()


@pytest.fixture
def ocr():
    return FakeOcr()


@pytest.fixture
def classifier(chat_model, registry):
    return ComplaintClassifier(chat_model, registry)


@pytest.fixture
def services(registry, classifier, transcriber, ocr, complaint_store, vector_client, embedding_service):
    return assemble_services(
        registry=registry,
        classifier=classifier,
        transcriber=transcriber,
        ocr=ocr,
        complaint_store=complaint_store,
        vector_client=vector_client,
        embedding_service=embedding_service,
    )


@pytest.fixture
def client(services):
    return TestClient(create_app(services))
