"""
Tests for similarity search over the vector store.
"""

import pytest

from complaint_backend.errors import InputValidationError
from complaint_backend.services.search_service import SimilaritySearchService

ENTRIES = [
    ("Duplicate charge on my card", "Acme"),
    ("Duplicate charge", "Globex"),
    ("Late fee on my loan", "Initech"),
    ("Mortgage payment marked late", "Umbrella"),
    ("Card charge", "Hooli"),
]


@pytest.fixture
def search_service(vector_client, embedding_service):
    for text, company in ENTRIES:
        vector_client.upsert_entry(
            text,
            {"company": company, "productCategory": "Credit card", "subProductCategory": "Store credit card"},
            embedding_service.embed_document(text),
        )
    return SimilaritySearchService(vector_client, embedding_service)


def test_search_returns_top_k_in_descending_similarity(search_service):
    hits = search_service.search("duplicate charge", top_k=2)

    assert len(hits) == 2
    assert [hit.page_content for hit in hits] == ["Duplicate charge", "Duplicate charge on my card"]
    assert hits[0].score >= hits[1].score
    assert hits[0].metadata["company"] == "Globex"


def test_search_uses_query_embedding(search_service, embeddings):
    search_service.search("late fee", top_k=1)

    assert embeddings.query_calls == ["late fee"]


def test_no_score_threshold(search_service):
    hits = search_service.search("duplicate charge", top_k=5)

    assert len(hits) == 5
    scores = [hit.score for hit in hits]
    assert scores == sorted(scores, reverse=True)


def test_hit_response_shape(search_service):
    hit = search_service.search("card", top_k=1)[0]

    assert set(hit.to_response()) == {"pageContent", "metadata", "score"}


@pytest.mark.parametrize("query,top_k", [("", 2), ("   ", 2), ("duplicate", 0)])
def test_invalid_search_rejected(search_service, embeddings, query, top_k):
    with pytest.raises(InputValidationError):
        search_service.search(query, top_k)

    assert embeddings.query_calls == []
