# Models for complaint records and LLM classification output
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr


class NewComplaint(BaseModel):
    """Complaint as written to the complaints table (id and created_at come from the store)"""

    model_config = ConfigDict(populate_by_name=True)

    company: str
    complaint: str
    product_category: Optional[str] = Field(None, alias="productCategory")
    product_subcategory: Optional[str] = Field(None, alias="productSubcategory")
    is_complaint: bool = Field(True, alias="isComplaint")

    def to_row(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class ClassificationResult(BaseModel):
    """
    Parsed LLM classification. Every field is required and strictly typed,
    a partially filled result is never produced.
    """

    model_config = ConfigDict(populate_by_name=True)

    is_complaint: StrictBool = Field(..., alias="isComplaint")
    summary: StrictStr
    category: StrictStr
    subcategory: StrictStr

    def to_response(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
