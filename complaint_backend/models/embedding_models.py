# Data classes for vector store entries and search hits
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class EmbeddingMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    company: str
    product_category: Optional[str] = Field(None, alias="productCategory")
    sub_product_category: Optional[str] = Field(None, alias="subProductCategory")
    date_created: Optional[str] = Field(None, alias="dateCreated")

    def to_payload(self) -> Dict[str, Any]:
        payload = self.model_dump(by_alias=True)
        if payload.get("dateCreated") is None:
            payload.pop("dateCreated", None)
        return payload


class SearchHit(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page_content: str = Field(..., alias="pageContent")
    metadata: Dict[str, Any] = {}
    score: Optional[float] = None

    def to_response(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
