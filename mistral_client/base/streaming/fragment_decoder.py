"""Decoding of event payloads into :class:`StreamFragment` objects.

Failure scope is a single line: a malformed payload raises (or, in
``decode_lines``, records) a :class:`DecodeError` carrying the parser
message, and every other line of the delivery is still decoded.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from pydantic import ValidationError

from ...dto.chat_stream import StreamFragment
from ..errors import DecodeError
from .event_classifier import EventKind, classify_line


@dataclass
class DecodedBatch:
    """Result of decoding the lines of one network delivery."""

    fragments: List[StreamFragment] = field(default_factory=list)
    errors: List[DecodeError] = field(default_factory=list)
    terminated: bool = False


def decode_fragment(payload: str) -> StreamFragment:
    """Parse one JSON payload into a fragment.

    Raises:
        DecodeError: the payload is not JSON or does not match the fragment schema.
    """
    try:
        return StreamFragment.model_validate_json(payload)
    except ValidationError as e:
        raise DecodeError(message=str(e), line=payload, raw=e) from e


def decode_line(line: str) -> Optional[List[StreamFragment]]:
    """Decode a single raw line.

    Returns ``None`` for the termination sentinel, ``[]`` for blank and
    keep-alive lines, and a one-element list for a data event.

    Raises:
        DecodeError: the data event's payload is malformed.
    """
    event = classify_line(line)
    if event.kind is EventKind.TERMINATION:
        return None
    if event.kind is EventKind.EMPTY:
        return []
    return [decode_fragment(event.payload or "")]


def decode_lines(lines: Iterable[str]) -> DecodedBatch:
    """Decode the lines of one delivery, stopping at the sentinel.

    Fragments decoded before the sentinel in the same delivery are kept.
    """
    batch = DecodedBatch()
    for line in lines:
        try:
            fragments = decode_line(line)
        except DecodeError as e:
            batch.errors.append(e)
            continue
        if fragments is None:
            batch.terminated = True
            break
        batch.fragments.extend(fragments)
    return batch


__all__ = ["DecodedBatch", "decode_fragment", "decode_line", "decode_lines"]
