"""mistral_client.config.defaults
==============================

Central place for small, stable default values used by the client. These
can be overridden by a config file, environment variables or constructor
arguments, but provide sensible fallbacks for local development and tests.

This module intentionally avoids importing from other client packages to
prevent circular dependencies. Only plain constants should live here.
"""

from __future__ import annotations

# ---- Endpoint ----
API_URL_BASE = "https://api.mistral.ai/v1"

# ---- Client fields ----
# Declared for parity with the API's official clients; never drives retries.
DEFAULT_MAX_RETRIES = 5
# Overall request timeout handed to the HTTP transport (seconds).
DEFAULT_TIMEOUT_SECONDS = 120

# ---- Chat parameter defaults ----
DEFAULT_TEMPERATURE = 0.7
DEFAULT_TOP_P = 1.0
DEFAULT_SAFE_PROMPT = False


__all__ = [
    "API_URL_BASE",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_TIMEOUT_SECONDS",
    "DEFAULT_TEMPERATURE",
    "DEFAULT_TOP_P",
    "DEFAULT_SAFE_PROMPT",
]
