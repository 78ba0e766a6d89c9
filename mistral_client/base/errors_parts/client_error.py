"""
Client construction errors.

Raised synchronously by :class:`mistral_client.Client` when it cannot be
configured. These never wrap a network failure.
"""
from __future__ import annotations

from ..constants import API_KEY_ENV_VAR


class ClientError(Exception):
    """Base class for client configuration failures."""


class MissingApiKeyError(ClientError):
    """No API key was passed and none could be resolved from configuration."""

    def __init__(self) -> None:
        super().__init__(
            f"You must either set the `{API_KEY_ENV_VAR}` environment variable "
            "or pass `api_key` to `Client(...)`."
        )


__all__ = ["ClientError", "MissingApiKeyError"]
