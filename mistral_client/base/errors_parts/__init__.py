"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `mistral_client.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .api_error import ApiError, TransportError, DecodeError
from .client_error import ClientError, MissingApiKeyError
from .classification import classify_exception, code_for_status

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
