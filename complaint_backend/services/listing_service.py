from datetime import datetime, timezone
from typing import Any, Dict, List, NamedTuple
import logging
import math

from complaint_backend.database.supabase_client import SupabaseComplaintStore
from complaint_backend.errors import InputValidationError

logger = logging.getLogger(__name__)

PAGE_SIZE = 10
SORT_ORDERS = ("date_desc", "date_asc", "company")


class ComplaintsPage(NamedTuple):
    complaints: List[Dict[str, Any]]
    page: int
    total_pages: int
    total: int


class ComplaintListingService:
    """
    Listing gateway for the dashboard.

    list_complaints returns every row unfiltered; sorting, the complaint
    filter toggle and pagination are applied afterwards over the full set.
    """

    def __init__(self, complaint_store: SupabaseComplaintStore):
        self.complaint_store = complaint_store

    def list_complaints(self) -> List[Dict[str, Any]]:
        return self.complaint_store.list_complaints()

    def view(self, sort: str = "date_desc", only_non_complaints: bool = False,
             page: int = 1, page_size: int = PAGE_SIZE) -> ComplaintsPage:
        rows = self.list_complaints()
        rows = filter_complaints(rows, only_non_complaints)
        rows = sort_complaints(rows, sort)
        return paginate(rows, page, page_size)


def _created_at_key(row: Dict[str, Any]) -> datetime:
    value = row.get("created_at")
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            logger.warning(f"Unparseable created_at on complaint {row.get('id')}: {value!r}")
            parsed = datetime.min
    else:
        parsed = datetime.min

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def sort_complaints(rows: List[Dict[str, Any]], sort: str = "date_desc") -> List[Dict[str, Any]]:
    """Total reorder of the full set"""
    if sort == "date_desc":
        return sorted(rows, key=_created_at_key, reverse=True)
    if sort == "date_asc":
        return sorted(rows, key=_created_at_key)
    if sort == "company":
        return sorted(rows, key=lambda row: row.get("company") or "")
    raise InputValidationError(f"Unknown sort order {sort!r}, expected one of {', '.join(SORT_ORDERS)}")


def filter_complaints(rows: List[Dict[str, Any]], only_non_complaints: bool = False) -> List[Dict[str, Any]]:
    """Toggle between the full set and the rows not classified as complaints"""
    if not only_non_complaints:
        return list(rows)
    return [row for row in rows if row.get("isComplaint") is False]


def paginate(rows: List[Dict[str, Any]], page: int = 1, page_size: int = PAGE_SIZE) -> ComplaintsPage:
    if page < 1:
        raise InputValidationError("page must be at least 1")
    if page_size < 1:
        raise InputValidationError("page_size must be at least 1")

    total = len(rows)
    total_pages = max(1, math.ceil(total / page_size))
    start = (page - 1) * page_size
    return ComplaintsPage(rows[start:start + page_size], page, total_pages, total)
