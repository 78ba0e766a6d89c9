"""Pytest configuration for the client test suite.

Isolates every test from the developer's environment: ``MISTRAL_*`` variables
are cleared, the dotenv lookup points at a missing file, cached configuration
is reset, and pooled HTTP clients are closed afterwards.
"""

from __future__ import annotations

import os
from typing import Iterator

import pytest

from mistral_client.base.http import close_all_clients
from mistral_client.config import reset_config_cache

_ISOLATED_VARS = (
    "MISTRAL_API_KEY",
    "MISTRAL_ENDPOINT",
    "MISTRAL_MAX_RETRIES",
    "MISTRAL_TIMEOUT",
    "MISTRAL_CONFIG_FILE",
)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Run each test with no ambient client configuration."""

    for name in _ISOLATED_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", os.fspath(tmp_path / "missing.env"))
    reset_config_cache()
    yield
    reset_config_cache()
    close_all_clients()
