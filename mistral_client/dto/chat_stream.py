"""
Incremental chat completion fragments produced by the stream decoder.

One ``StreamFragment`` is decoded from each ``data: {...}`` event of a
streamed chat completion. Fragments are frozen: they are built once per line
and handed to the caller as-is.

JSON shape::

    {"id": str, "object": str, "created": int, "model": str,
     "choices": [{"index": int,
                  "delta": {"role"?: str, "content": str, "tool_calls"?: [...]},
                  "finish_reason"?: str}],
     "usage"?: {"prompt_tokens": int, "completion_tokens": int, "total_tokens": int}}
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .chat import ChatMessageRole
from .common import ResponseUsage
from .tool import ToolCall


class Delta(BaseModel):
    """Content produced in one step; ``role`` is only set on a message's first delta."""

    model_config = ConfigDict(frozen=True)

    role: Optional[ChatMessageRole] = None
    content: str = ""
    tool_calls: Optional[List[ToolCall]] = None

    @field_validator("content", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class FragmentChoice(BaseModel):
    """One parallel completion's delta; ``finish_reason`` marks its last fragment."""

    model_config = ConfigDict(frozen=True)

    index: int
    delta: Delta
    finish_reason: Optional[str] = None


class StreamFragment(BaseModel):
    """One incremental unit of a streamed chat completion; carries at least one choice."""

    model_config = ConfigDict(frozen=True)

    id: str
    object: str
    created: int
    model: str
    choices: List[FragmentChoice] = Field(min_length=1)
    usage: Optional[ResponseUsage] = None

    @property
    def content(self) -> str:
        """Delta text of the first choice."""
        return self.choices[0].delta.content


__all__ = ["Delta", "FragmentChoice", "StreamFragment"]
