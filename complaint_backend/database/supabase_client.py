from typing import List, Dict, Any, Optional
import logging

from postgrest.exceptions import APIError
from supabase import create_client, Client, ClientOptions

from complaint_backend.errors import StoreReadError, StoreWriteError

logger = logging.getLogger(__name__)


def _api_error_details(error: APIError) -> Dict[str, Any]:
    return {
        "message": error.message,
        "code": error.code,
        "details": error.details,
        "hint": error.hint,
    }


class SupabaseComplaintStore:
    """
    Relational store for complaint rows (Supabase / PostgREST).
    id and created_at are assigned by the database on insert.
    """

    def __init__(self, client: Client, table_name: str = "complaints"):
        self.client = client
        self.table_name = table_name

    @classmethod
    def from_credentials(cls, url: str, key: str,
                         table_name: str = "complaints",
                         timeout_seconds: Optional[float] = None) -> "SupabaseComplaintStore":
        if not url or not key:
            raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set in environment variables")

        options = ClientOptions(postgrest_client_timeout=timeout_seconds) if timeout_seconds else None
        client = create_client(url, key, options=options) if options else create_client(url, key)
        return cls(client, table_name)

    def insert_complaint(self, row: Dict[str, Any]) -> List[Dict[str, Any]]:
        """
        Insert one complaint row and return the inserted rows as reported by the store
        """
        return self.insert_complaints([row])

    def insert_complaints(self, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Insert a batch of complaint rows in one request
        """
        try:
            response = self.client.table(self.table_name).insert(rows).execute()
        except APIError as e:
            logger.error(f"Supabase rejected complaint insert: {e.message}")
            raise StoreWriteError(
                e.message or "Insert rejected",
                service="supabase",
                details=_api_error_details(e),
            ) from e
        except Exception as e:
            logger.error(f"Error inserting complaint into {self.table_name}: {str(e)}")
            raise StoreWriteError(str(e), service="supabase") from e

        inserted = response.data or []
        logger.info(f"Inserted {len(inserted)} row(s) into {self.table_name}")
        return inserted

    def list_complaints(self) -> List[Dict[str, Any]]:
        """
        Fetch every complaint row, unfiltered, in store order
        """
        try:
            response = self.client.table(self.table_name).select("*").execute()
        except APIError as e:
            logger.error(f"Supabase rejected complaint listing: {e.message}")
            raise StoreReadError(e.message or "Select rejected", service="supabase") from e
        except Exception as e:
            logger.error(f"Error listing complaints from {self.table_name}: {str(e)}")
            raise StoreReadError(str(e), service="supabase") from e

        rows = response.data or []
        logger.info(f"Fetched {len(rows)} complaints from {self.table_name}")
        return rows
