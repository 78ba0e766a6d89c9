"""Map exceptions and HTTP statuses onto :class:`ErrorCode`.

Used when the client turns an httpx failure or a non-success response into a
:class:`TransportError`, and when a stream fails while reading the body.
"""
from __future__ import annotations

import asyncio
from typing import Dict, Optional, Tuple

import httpx

from .api_error import ApiError
from .error_code import ErrorCode

_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}

# Checked in order; every needle of an entry must occur in the message.
_MESSAGE_HINTS: Tuple[Tuple[ErrorCode, Tuple[str, ...]], ...] = (
    (ErrorCode.RATE_LIMIT, ("rate", "limit")),
    (ErrorCode.TIMEOUT, ("timeout",)),
    (ErrorCode.TIMEOUT, ("timed out",)),
    (ErrorCode.AUTH, ("unauthorized",)),
    (ErrorCode.AUTH, ("forbidden",)),
    (ErrorCode.CONNECTION, ("connection",)),
    (ErrorCode.CONNECTION, ("reset",)),
    (ErrorCode.NOT_FOUND, ("not found",)),
    (ErrorCode.UNAVAILABLE, ("unavailable",)),
    (ErrorCode.VALIDATION, ("invalid",)),
    (ErrorCode.SERVER_ERROR, ("server error",)),
)


def _valid_status(value: object) -> Optional[int]:
    return value if isinstance(value, int) and 100 <= value < 600 else None


def _extract_status(exc: object) -> Optional[int]:
    """HTTP status carried by ``exc`` (``status_code``, ``status`` or ``response.status_code``)."""
    for attr in ("status_code", "status"):
        status = _valid_status(getattr(exc, attr, None))
        if status is not None:
            return status
    return _valid_status(getattr(getattr(exc, "response", None), "status_code", None))


def code_for_status(status: int) -> ErrorCode:
    """Error code for an HTTP status; unmapped 5xx are ``SERVER_ERROR``, anything else ``UNKNOWN``."""
    code = _HTTP_STATUS_MAP.get(status)
    if code is not None:
        return code
    return ErrorCode.SERVER_ERROR if 500 <= status < 600 else ErrorCode.UNKNOWN


def _code_from_message(message: str) -> ErrorCode:
    for code, needles in _MESSAGE_HINTS:
        if all(n in message for n in needles):
            return code
    return ErrorCode.UNKNOWN


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify ``exc``.

    Order: an :class:`ApiError` keeps its code; timeouts; httpx network and
    protocol errors; a carried HTTP status; message keywords; ``UNKNOWN``.
    """
    if isinstance(exc, ApiError):
        return exc.code
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, (httpx.NetworkError, httpx.ProtocolError)):
        return ErrorCode.CONNECTION
    status = _extract_status(exc)
    if status is not None:
        return code_for_status(status)
    return _code_from_message(str(exc).lower())


__all__ = ["classify_exception", "code_for_status"]
