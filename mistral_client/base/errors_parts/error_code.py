"""
Normalized client error codes (taxonomy).

Defines the `ErrorCode` enumeration attached to every `ApiError`. Values are
lowercase snake_case and are considered a stable public contract for logging.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    TRANSIENT = "transient"
    CONNECTION = "connection"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    DECODE = "decode"
    MISSING_API_KEY = "missing_api_key"  # pragma: allowlist secret - code name, not a secret
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
