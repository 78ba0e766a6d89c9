"""Base shared constants for the client.

Central location to avoid scattering magic strings across the request
builder and the streaming decoder.

# pragma: allowlist secret
"""
from __future__ import annotations

# ---- Credentials ----
API_KEY_ENV_VAR = "MISTRAL_API_KEY"  # pragma: allowlist secret - env var name, not a secret

# ---- Server-sent events ----
# Prefix carried by every data-bearing line of the event stream.
DATA_PREFIX = "data: "
# Literal line closing a stream.
DONE_SENTINEL = "data: [DONE]"

# ---- HTTP ----
JSON_CONTENT_TYPE = "application/json"
EVENT_STREAM_CONTENT_TYPE = "text/event-stream"
USER_AGENT_PREFIX = "mistral-client-py"
CLIENT_VERSION = "0.1.0"

# ---- Endpoints (relative to the configured endpoint) ----
CHAT_COMPLETIONS_PATH = "/chat/completions"
EMBEDDINGS_PATH = "/embeddings"
MODELS_PATH = "/models"

__all__ = [
    "API_KEY_ENV_VAR",
    "DATA_PREFIX",
    "DONE_SENTINEL",
    "JSON_CONTENT_TYPE",
    "EVENT_STREAM_CONTENT_TYPE",
    "USER_AGENT_PREFIX",
    "CLIENT_VERSION",
    "CHAT_COMPLETIONS_PATH",
    "EMBEDDINGS_PATH",
    "MODELS_PATH",
]
