"""Classification of framed event-stream lines.

Every line is one of:

- ``TERMINATION``: the ``data: [DONE]`` sentinel; nothing after it is read.
- ``EMPTY``: blank line, ``data:`` with nothing after it, or a ``:`` comment
  (keep-alive). Produces no fragment and no error.
- ``DATA``: anything else. The ``data:`` prefix is stripped and the rest is
  handed to the fragment decoder as a JSON candidate.

Pure functions; no state.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..constants import DATA_PREFIX, DONE_SENTINEL

_DATA_FIELD = DATA_PREFIX.rstrip()
_DONE_PAYLOAD = DONE_SENTINEL[len(DATA_PREFIX):]


class EventKind(str, Enum):
    TERMINATION = "termination"
    EMPTY = "empty"
    DATA = "data"


@dataclass(frozen=True)
class StreamEvent:
    kind: EventKind
    payload: Optional[str] = None


TERMINATION_EVENT = StreamEvent(EventKind.TERMINATION)
EMPTY_EVENT = StreamEvent(EventKind.EMPTY)


def classify_line(line: str) -> StreamEvent:
    """Classify one framed line of the event stream."""
    trimmed = line.strip()
    if trimmed == DONE_SENTINEL:
        return TERMINATION_EVENT
    if not trimmed or trimmed.startswith(":"):
        return EMPTY_EVENT
    if trimmed.startswith(_DATA_FIELD):
        payload = trimmed[len(_DATA_FIELD):].strip()
        if payload == _DONE_PAYLOAD:
            return TERMINATION_EVENT
    else:
        payload = trimmed
    if not payload:
        return EMPTY_EVENT
    return StreamEvent(EventKind.DATA, payload)


__all__ = ["EventKind", "StreamEvent", "classify_line", "TERMINATION_EVENT", "EMPTY_EVENT"]
