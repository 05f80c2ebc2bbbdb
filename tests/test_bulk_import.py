"""
Tests for the dataset import command.
"""

import json

import pytest

from complaint_backend.bulk_import import (
    BATCH_SIZE,
    build_parser,
    import_documents,
    load_dataset,
    record_from_document,
)
from complaint_backend.services.persistence_service import ComplaintPersistenceService


def document(doc_id, text="Duplicate charge on my card", company="Acme", date="2019-03-01"):
    return {
        "_id": doc_id,
        "_source": {
            "complaint_what_happened": text,
            "company": company,
            "product": "Credit card",
            "sub_product": "Store credit card",
            "date_received": date,
        },
    }


@pytest.fixture
def persistence(complaint_store, vector_client, embedding_service):
    return ComplaintPersistenceService(complaint_store, vector_client, embedding_service)


def test_document_maps_to_complaint_row():
    record = record_from_document(document("3211475"))

    assert record.complaint.to_row() == {
        "company": "Acme",
        "complaint": "Duplicate charge on my card",
        "productCategory": "Credit card",
        "productSubcategory": "Store credit card",
        "isComplaint": True,
    }
    assert record.date_received == "2019-03-01"


def test_document_without_text_is_skipped():
    assert record_from_document(document("1", text="")) is None
    assert record_from_document({"_id": "2"}) is None


def test_import_writes_in_batches(persistence, complaints_table, vector_client):
    documents = [document(str(i), text=f"Late fee number {i}") for i in range(5)]

    summary = import_documents(persistence, documents, batch_size=2)

    assert summary.batches == 3
    assert summary.rows_inserted == 5
    assert summary.failed_inserts == 0
    assert [len(rows) for rows in complaints_table.insert_calls] == [2, 2, 1]
    records, _ = vector_client.client.scroll(vector_client.collection_name, limit=10, with_payload=True)
    assert len(records) == 5
    assert all(r.payload["metadata"]["dateCreated"] == "2019-03-01" for r in records)


def test_failed_batch_does_not_stop_import(persistence, complaints_table):
    complaints_table.error = {"message": "statement timeout", "code": "57014"}
    documents = [document("1"), document("2", text=""), document("3")]

    summary = import_documents(persistence, documents, batch_size=1)

    assert summary.batches == 2
    assert summary.failed_inserts == 2
    assert summary.rows_inserted == 0
    assert summary.skipped == 1
    assert len(complaints_table.insert_calls) == 2


def test_batch_size_must_be_positive(persistence):
    with pytest.raises(ValueError):
        import_documents(persistence, [document("1")], batch_size=0)


def test_load_dataset_requires_array(tmp_path):
    path = tmp_path / "data.json"
    path.write_text(json.dumps({"_id": "1"}))

    with pytest.raises(ValueError):
        load_dataset(str(path))

    path.write_text(json.dumps([document("1")]))
    assert load_dataset(str(path))[0]["_id"] == "1"


def test_parser_defaults():
    args = build_parser().parse_args(["complaints.json", "--start", "4400", "--limit", "48"])

    assert args.dataset == "complaints.json"
    assert args.batch_size == BATCH_SIZE == 40
    assert args.start == 4400
    assert args.limit == 48
