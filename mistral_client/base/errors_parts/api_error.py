"""
Structured API error exception types.

``ApiError`` is the root of every failure surfaced by the client. Two
subclasses split the failure modes that matter to stream consumers:

- ``TransportError``: connection/network failure or a non-success HTTP
  status. Fatal for the call that observed it.
- ``DecodeError``: malformed UTF-8 or malformed JSON. Local to the offending
  line or body; streams report it as an item-level error and keep going.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ApiError(Exception):
    """Represents a structured API error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        status_code: HTTP status when the failure came from a response.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    status_code: Optional[int] = None
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{type(self).__name__}: {self.message}"


@dataclass
class TransportError(ApiError):
    """Connection failure or non-success status observed before a body is used."""


@dataclass
class DecodeError(ApiError):
    """A chunk, line or body could not be decoded into the expected structure."""

    code: ErrorCode = ErrorCode.DECODE
    message: str = "decode error"
    line: Optional[str] = None


__all__ = ["ApiError", "TransportError", "DecodeError"]
