# Pydantic models for outgoing API responses
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TranscriptionResponse(BaseModel):
    text: str


class ListComplaintsResponse(BaseModel):
    complaints: List[Dict[str, Any]]


class ComplaintsViewResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    complaints: List[Dict[str, Any]]
    page: int
    total_pages: int = Field(..., alias="totalPages")
    total: int


class PersistOutcome(BaseModel):
    """
    Result of writing one complaint to both stores.
    The two writes are independent, so an insert error and a vector error
    are reported separately.
    """

    data: Optional[Any] = None
    error: Optional[Dict[str, Any]] = None
    vector_error: Optional[Dict[str, Any]] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def to_response(self) -> Dict[str, Any]:
        if self.error is not None:
            body: Dict[str, Any] = {"error": self.error}
        else:
            body = {"data": self.data}
        if self.vector_error is not None:
            body["vectorError"] = self.vector_error
        return body
