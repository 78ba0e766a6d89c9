"""Accumulation of stream fragments into a single summary."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from ...dto.chat import ChatMessageRole
from ...dto.chat_stream import StreamFragment
from ...dto.common import ResponseUsage
from ...dto.tool import ToolCall


@dataclass
class StreamSummary:
    """Concatenated view of the first choice across a stream.

    Fields:
      text: joined delta content of choice index 0
      role: role announced by the first delta that carried one
      finish_reason: last finish reason seen for choice index 0
      usage: last usage block seen
      tool_calls: tool calls from any delta of choice index 0, in order
      fragments: number of fragments accumulated
    """

    id: Optional[str] = None
    model: Optional[str] = None
    text: str = ""
    role: Optional[ChatMessageRole] = None
    finish_reason: Optional[str] = None
    usage: Optional[ResponseUsage] = None
    tool_calls: Optional[List[ToolCall]] = None
    fragments: int = 0


def accumulate_fragments(fragments: Iterable[StreamFragment]) -> StreamSummary:
    """Fold fragments into a :class:`StreamSummary`."""
    summary = StreamSummary()
    parts: List[str] = []
    for fragment in fragments:
        summary.fragments += 1
        if summary.id is None:
            summary.id = fragment.id
            summary.model = fragment.model
        if fragment.usage is not None:
            summary.usage = fragment.usage
        for choice in fragment.choices:
            if choice.index != 0:
                continue
            delta = choice.delta
            if delta.role is not None and summary.role is None:
                summary.role = delta.role
            if delta.content:
                parts.append(delta.content)
            if delta.tool_calls:
                summary.tool_calls = (summary.tool_calls or []) + list(delta.tool_calls)
            if choice.finish_reason is not None:
                summary.finish_reason = choice.finish_reason
    summary.text = "".join(parts)
    return summary


__all__ = ["StreamSummary", "accumulate_fragments"]
