"""Construction tests for Client: key resolution and defaults."""

from __future__ import annotations

import pytest

from mistral_client import Client, ClientError, MissingApiKeyError


def test_new_with_explicit_values():
    client = Client(api_key="test_api_key", endpoint="https://example.org/v1", max_retries=3, timeout=60)
    assert client.api_key == "test_api_key"  # nosec B101
    assert client.endpoint == "https://example.org/v1"  # nosec B101
    assert client.max_retries == 3  # nosec B101
    assert client.timeout == 60  # nosec B101


def test_new_with_defaults_and_key_from_env(monkeypatch):
    monkeypatch.setenv("MISTRAL_API_KEY", "test_api_key_from_env")
    client = Client()
    assert client.api_key == "test_api_key_from_env"  # nosec B101
    assert client.endpoint == "https://api.mistral.ai/v1"  # nosec B101
    assert client.max_retries == 5  # nosec B101
    assert client.timeout == 120  # nosec B101


def test_explicit_key_wins_over_env(monkeypatch):
    monkeypatch.setenv("MISTRAL_API_KEY", "from-env")
    assert Client(api_key="explicit").api_key == "explicit"  # nosec B101


def test_missing_api_key_raises():
    with pytest.raises(MissingApiKeyError) as exc_info:
        Client()
    assert isinstance(exc_info.value, ClientError)  # nosec B101
    assert "MISTRAL_API_KEY" in str(exc_info.value)  # nosec B101


def test_empty_env_key_counts_as_missing(monkeypatch):
    monkeypatch.setenv("MISTRAL_API_KEY", "")
    with pytest.raises(MissingApiKeyError):
        Client()


def test_endpoint_and_timeout_from_env(monkeypatch):
    monkeypatch.setenv("MISTRAL_ENDPOINT", "https://proxy.local/v1/")
    monkeypatch.setenv("MISTRAL_TIMEOUT", "15")
    client = Client(api_key="k")
    assert client.endpoint == "https://proxy.local/v1"  # nosec B101
    assert client.timeout == 15  # nosec B101


def test_key_from_dotenv_file(monkeypatch, tmp_path):
    from mistral_client.config import reset_config_cache

    env_file = tmp_path / ".env"
    env_file.write_text("# local\nMISTRAL_API_KEY='dotenv-key'\n", encoding="utf-8")
    monkeypatch.setenv("DOTENV_FILE", str(env_file))
    # placeholder value; the dotenv file overrides it
    monkeypatch.setenv("MISTRAL_API_KEY", "placeholder")
    reset_config_cache()
    assert Client().api_key == "dotenv-key"  # nosec B101


def test_repr_does_not_leak_key():
    assert "secret-key" not in repr(Client(api_key="secret-key"))  # nosec B101
