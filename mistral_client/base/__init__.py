"""
Client base package

Transport-agnostic building blocks shared by the client: error taxonomy,
structured logging, the shared httpx client cache, the event-stream decoder
(``base.streaming``) and the tool-dispatch registry (``base.tools``).

Only the error and logging surfaces are re-exported here; the streaming and
tools subpackages depend on the DTO layer and are imported explicitly.
"""

from .errors import (
    ApiError,
    ClientError,
    DecodeError,
    ErrorCode,
    MissingApiKeyError,
    TransportError,
    classify_exception,
)
from .logging import LogContext, get_logger, log_event, normalized_log_event

__all__ = [
    "ApiError",
    "ClientError",
    "DecodeError",
    "ErrorCode",
    "MissingApiKeyError",
    "TransportError",
    "classify_exception",
    "LogContext",
    "get_logger",
    "log_event",
    "normalized_log_event",
]
