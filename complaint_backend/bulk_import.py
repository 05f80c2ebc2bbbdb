"""Import a complaints dataset export into both stores.

Usage::

    python -m complaint_backend.bulk_import data/complaints.json
    python -m complaint_backend.bulk_import data/complaints.json --batch-size 40 --start 4400 --limit 48

The dataset is a JSON array of search-index documents::

    {"_id": "...", "_source": {"complaint_what_happened": "...", "company": "...",
                               "product": "...", "sub_product": "...", "date_received": "..."}}

Every imported row is a complaint (isComplaint true). Embeddings carry the
record's date_received as dateCreated.
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, Iterator, List, NamedTuple, Optional, Sequence

from complaint_backend.models.complaint_models import NewComplaint
from complaint_backend.services.persistence_service import ComplaintPersistenceService

logger = logging.getLogger(__name__)

BATCH_SIZE = 40


class DatasetRecord(NamedTuple):
    complaint: NewComplaint
    date_received: Optional[str]


class ImportSummary(NamedTuple):
    batches: int
    rows_inserted: int
    failed_inserts: int
    failed_embeddings: int
    skipped: int


def record_from_document(document: Dict[str, Any]) -> Optional[DatasetRecord]:
    """Map one dataset document to a complaint, None when it has no complaint text or company"""
    source = document.get("_source") or {}
    text = (source.get("complaint_what_happened") or "").strip()
    company = (source.get("company") or "").strip()
    if not text or not company:
        return None

    complaint = NewComplaint(
        company=company,
        complaint=text,
        productCategory=source.get("product"),
        productSubcategory=source.get("sub_product"),
        isComplaint=True,
    )
    return DatasetRecord(complaint, source.get("date_received"))


def load_dataset(path: str) -> List[Dict[str, Any]]:
    with open(path, encoding="utf-8") as f:
        documents = json.load(f)
    if not isinstance(documents, list):
        raise ValueError(f"{path} does not contain a JSON array of documents")
    return documents


def chunked(items: Sequence[DatasetRecord], size: int) -> Iterator[Sequence[DatasetRecord]]:
    for start in range(0, len(items), size):
        yield items[start:start + size]


def import_documents(persistence: ComplaintPersistenceService,
                     documents: Sequence[Dict[str, Any]],
                     batch_size: int = BATCH_SIZE) -> ImportSummary:
    """
    Write the documents batch by batch. A failed batch is logged and the
    import moves on to the next one.
    """
    if batch_size < 1:
        raise ValueError("batch_size must be at least 1")

    records: List[DatasetRecord] = []
    skipped = 0
    for document in documents:
        record = record_from_document(document)
        if record is None:
            skipped += 1
            logger.warning(f"Skipping document {document.get('_id')!r}: no complaint text or company")
            continue
        records.append(record)

    batches = rows_inserted = failed_inserts = failed_embeddings = 0
    for batch in chunked(records, batch_size):
        batches += 1
        outcome = persistence.persist_batch(
            [record.complaint for record in batch],
            [record.date_received for record in batch],
        )
        if outcome.succeeded:
            rows_inserted += len(outcome.data or [])
        else:
            failed_inserts += len(batch)
        if outcome.vector_error is not None:
            failed_embeddings += len(batch)
        logger.info(f"Batch {batches}: {len(batch)} complaints processed")

    summary = ImportSummary(batches, rows_inserted, failed_inserts, failed_embeddings, skipped)
    logger.info(f"Import finished: {summary}")
    return summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Import a complaints dataset into Supabase and Qdrant")
    parser.add_argument("dataset", help="Path to the JSON dataset export")
    parser.add_argument("--batch-size", type=int, default=BATCH_SIZE, help="Complaints per request")
    parser.add_argument("--start", type=int, default=0, help="Index of the first document to import")
    parser.add_argument("--limit", type=int, default=None, help="Maximum number of documents to import")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    from dotenv import load_dotenv
    load_dotenv()

    from complaint_backend.api.dependencies import build_persistence
    from complaint_backend.config import Settings

    settings = Settings.from_env()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    documents = load_dataset(args.dataset)
    end = None if args.limit is None else args.start + args.limit
    summary = import_documents(build_persistence(settings), documents[args.start:end], args.batch_size)

    print(
        f"Imported {summary.rows_inserted} complaints in {summary.batches} batches "
        f"({summary.failed_inserts} insert failures, {summary.failed_embeddings} embedding failures, "
        f"{summary.skipped} skipped)"
    )
    return 1 if summary.failed_inserts or summary.failed_embeddings else 0


if __name__ == "__main__":
    sys.exit(main())
