"""Pydantic DTOs for ``POST /embeddings``."""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, field_validator

from .common import EmbedModel, ResponseUsage, enum_value


class EmbeddingRequestEncodingFormat(str, Enum):
    FLOAT = "float"


class EmbeddingRequestOptions(BaseModel):
    encoding_format: Optional[EmbeddingRequestEncodingFormat] = None


class EmbeddingRequest(BaseModel):
    model: str
    input: List[str]
    encoding_format: Optional[EmbeddingRequestEncodingFormat] = None

    @field_validator("model", mode="before")
    @classmethod
    def _model_id(cls, value: Any) -> Any:
        return enum_value(value)

    @classmethod
    def new(
        cls,
        model: Union[EmbedModel, str],
        input: List[str],
        options: Optional[EmbeddingRequestOptions] = None,
    ) -> "EmbeddingRequest":
        opts = options or EmbeddingRequestOptions()
        return cls(model=model, input=input, encoding_format=opts.encoding_format)

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)


class EmbeddingResponseDataItem(BaseModel):
    index: int
    embedding: List[float]
    object: str


class EmbeddingResponse(BaseModel):
    id: str
    object: str
    model: str
    data: List[EmbeddingResponseDataItem]
    usage: ResponseUsage


__all__ = [
    "EmbeddingRequestEncodingFormat",
    "EmbeddingRequestOptions",
    "EmbeddingRequest",
    "EmbeddingResponseDataItem",
    "EmbeddingResponse",
]
