"""mistral_client.config.env
=========================

Environment variable mapping and helpers for client settings.

Purpose
-------
- Single source of truth for which environment variable feeds which client
  field.
- Collect the mapped variables that are set, and detect placeholder values.

Failure Modes
-------------
Helpers never raise on unset variables; unset or empty ones are simply
left out of ``env_overrides``.
"""

from __future__ import annotations

import os
from typing import Dict, Optional

from ..base.constants import API_KEY_ENV_VAR

# Client field -> environment variable
ENV_FIELD_MAP: Dict[str, str] = {
    "api_key": API_KEY_ENV_VAR,
    "endpoint": "MISTRAL_ENDPOINT",
    "max_retries": "MISTRAL_MAX_RETRIES",
    "timeout": "MISTRAL_TIMEOUT",
}

CONFIG_FILE_ENV_VAR = "MISTRAL_CONFIG_FILE"


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. The check is case-insensitive and resilient to surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def env_overrides() -> Dict[str, str]:
    """Collect every mapped client field currently set in the environment."""
    out: Dict[str, str] = {}
    for field, name in ENV_FIELD_MAP.items():
        val = os.getenv(name)
        if val is not None and val != "":
            out[field] = val
    return out


__all__ = [
    "ENV_FIELD_MAP",
    "CONFIG_FILE_ENV_VAR",
    "is_placeholder",
    "env_overrides",
]
