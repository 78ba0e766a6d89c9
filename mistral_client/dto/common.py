"""Shared DTO pieces: token usage, model identifiers, enum coercion."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class Model(str, Enum):
    """Chat model identifiers known to the API.

    Responses carry the model as a plain string; the ``str`` mixin keeps
    ``response.model == Model.OPEN_MISTRAL_7B`` working.
    """

    OPEN_MISTRAL_7B = "open-mistral-7b"
    OPEN_MIXTRAL_8X7B = "open-mixtral-8x7b"
    OPEN_MIXTRAL_8X22B = "open-mixtral-8x22b"
    MISTRAL_TINY = "mistral-tiny"
    MISTRAL_SMALL_LATEST = "mistral-small-latest"
    MISTRAL_MEDIUM_LATEST = "mistral-medium-latest"
    MISTRAL_LARGE_LATEST = "mistral-large-latest"
    CODESTRAL_LATEST = "codestral-latest"


class EmbedModel(str, Enum):
    """Embedding model identifiers known to the API."""

    MISTRAL_EMBED = "mistral-embed"


def enum_value(value: Any) -> Any:
    """Unwrap an ``Enum`` member to its value; pass anything else through."""
    return value.value if isinstance(value, Enum) else value


class ResponseUsage(BaseModel):
    """Token accounting attached to completion and embedding responses."""

    model_config = ConfigDict(frozen=True)

    prompt_tokens: int
    completion_tokens: int = 0
    total_tokens: int


__all__ = ["Model", "EmbedModel", "ResponseUsage", "enum_value"]
