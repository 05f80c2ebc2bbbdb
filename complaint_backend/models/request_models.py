# Pydantic models for incoming API requests
from pydantic import BaseModel, ConfigDict, Field


class ClassifyRequest(BaseModel):
    query: str = ""


class ExtractTextRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    base64_string: str = Field("", alias="base64String")


class SimilaritySearchRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    query: str = ""
    top_k: int = Field(..., alias="topK")
