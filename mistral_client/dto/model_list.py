"""
Pydantic DTOs for ``GET /models``.

The listing carries fields the API does not document (``root``, ``parent``,
capability blocks); unknown keys are ignored rather than rejected.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class ModelListDataPermission(BaseModel):
    id: str
    object: str
    created: int
    allow_create_engine: bool = False
    allow_sampling: bool = False
    allow_logprobs: bool = False
    allow_search_indices: bool = False
    allow_view: bool = False
    allow_fine_tuning: bool = False
    organization: str = "*"
    is_blocking: bool = False


class ModelListData(BaseModel):
    id: str
    object: str
    created: int
    owned_by: str
    permission: List[ModelListDataPermission] = Field(default_factory=list)
    root: Optional[str] = None
    parent: Optional[str] = None


class ModelListResponse(BaseModel):
    object: str
    data: List[ModelListData]

    def ids(self) -> List[str]:
        """Model identifiers in listing order."""
        return [m.id for m in self.data]


__all__ = ["ModelListDataPermission", "ModelListData", "ModelListResponse"]
