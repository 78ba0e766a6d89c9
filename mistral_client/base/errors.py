"""Unified client error taxonomy public surface.

This module re-exports the implementations under
``mistral_client.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.api_error import ApiError, TransportError, DecodeError
from .errors_parts.client_error import ClientError, MissingApiKeyError
from .errors_parts.classification import classify_exception, code_for_status

__all__ = [
    "ErrorCode",
    "ApiError",
    "TransportError",
    "DecodeError",
    "ClientError",
    "MissingApiKeyError",
    "classify_exception",
    "code_for_status",
]
