"""Line framing for the chat completion event stream.

Splits raw network deliveries into newline-delimited text lines.

Two modes:

- strict (default): an incremental UTF-8 decoder and a trailing partial-line
  buffer carry state between deliveries, so a line (or a multi-byte
  character) split across two chunks is reassembled. ``flush`` returns the
  final unterminated line once the transport reports end of body.
- per-chunk (``strict=False``): each delivery is decoded and split on its own
  and nothing is retained. An unterminated trailing line is handed on as if
  it were complete, which usually makes it fail JSON decoding downstream.

Invalid UTF-8 raises :class:`DecodeError`; the framer resets and remains
usable for the next delivery.
"""
from __future__ import annotations

import codecs
from typing import List

from ..errors import DecodeError


class LineFramer:
    """Stateful (strict) or stateless (per-chunk) bytes-to-lines splitter."""

    def __init__(self, *, strict: bool = True) -> None:
        self.strict = strict
        self._decoder = codecs.getincrementaldecoder("utf-8")()
        self._pending = ""

    @property
    def pending(self) -> str:
        """Unterminated text retained from previous deliveries (strict mode only)."""
        return self._pending

    def feed(self, chunk: bytes) -> List[str]:
        """Return the complete lines available after ``chunk``.

        Raises:
            DecodeError: ``chunk`` is not valid UTF-8.
        """
        if not self.strict:
            return self._decode(chunk, final=True).split("\n")
        text = self._pending + self._decode(chunk, final=False)
        *lines, self._pending = text.split("\n")
        return lines

    def flush(self) -> List[str]:
        """Return the retained partial line at end of stream and reset.

        Raises:
            DecodeError: the stream ended inside a multi-byte character.
        """
        if not self.strict:
            return []
        tail = self._pending + self._decode(b"", final=True)
        self.reset()
        return [tail] if tail else []

    def reset(self) -> None:
        self._decoder.reset()
        self._pending = ""

    def _decode(self, chunk: bytes, *, final: bool) -> str:
        try:
            if self.strict:
                return self._decoder.decode(chunk, final=final)
            return chunk.decode("utf-8")
        except UnicodeDecodeError as e:
            self.reset()
            raise DecodeError(message=f"stream chunk is not valid UTF-8: {e}", raw=e) from e


__all__ = ["LineFramer"]
