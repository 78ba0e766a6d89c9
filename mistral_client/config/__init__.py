"""Unified configuration layer for the client.

Sources are merged in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) named by MISTRAL_CONFIG_FILE
    3. Environment variables (MISTRAL_API_KEY, MISTRAL_ENDPOINT,
       MISTRAL_MAX_RETRIES, MISTRAL_TIMEOUT)
    4. In-code overrides (``None`` values are ignored)

A ``.env`` file (``DOTENV_FILE``, default ``.env``) is read once before the
environment is consulted.

External Config File
--------------------
```
api_key: ${MISTRAL_API_KEY}
endpoint: https://api.mistral.ai/v1
max_retries: 5
timeout: 120
```

Public API
----------
* get_client_config(overrides: dict | None = None) -> dict
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .defaults import API_URL_BASE, DEFAULT_MAX_RETRIES, DEFAULT_TIMEOUT_SECONDS
from .env import CONFIG_FILE_ENV_VAR, env_overrides, is_placeholder

DEFAULTS: Dict[str, Any] = {
    "endpoint": API_URL_BASE,
    "max_retries": DEFAULT_MAX_RETRIES,
    "timeout": DEFAULT_TIMEOUT_SECONDS,
}

_INT_FIELDS = ("max_retries", "timeout")

_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


def _parse_dotenv_line(line: str) -> Optional[Tuple[str, str]]:
    line = line.strip()
    if not line or line.startswith("#"):
        return None
    key, sep, value = line.partition("=")
    key = key.strip()
    if not sep or not key:
        return None
    return key, value.strip().strip("'\"")


def _load_dotenv_once() -> None:
    """Export ``KEY=VALUE`` pairs from the dotenv file, once per process.

    A variable that is already set wins unless its value is a placeholder.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    _DOTENV_LOADED = True
    path = Path(os.getenv("DOTENV_FILE", ".env"))
    if not path.is_file():
        return
    for raw in path.read_text(encoding="utf-8").splitlines():
        pair = _parse_dotenv_line(raw)
        if pair is None:
            continue
        key, value = pair
        current = os.environ.get(key)
        if current is None or is_placeholder(current):
            os.environ[key] = value


def _read_config_file(path: Path) -> Dict[str, Any]:
    """JSON first, then YAML; anything that is not a mapping reads as empty."""
    text = path.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError:
            return {}
    if not isinstance(data, dict):
        return {}
    return {k: os.path.expandvars(v) if isinstance(v, str) else v for k, v in data.items()}


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is None:
        name = os.getenv(CONFIG_FILE_ENV_VAR)
        _FILE_CACHE = _read_config_file(Path(name)) if name and Path(name).is_file() else {}
    return _FILE_CACHE


def _coerce_ints(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Env and file values may arrive as strings; unparsable ones fall back to the default."""
    for name in _INT_FIELDS:
        value = cfg.get(name)
        if isinstance(value, str):
            cfg[name] = int(value) if value.strip().lstrip("-").isdigit() else DEFAULTS[name]
    return cfg


def get_client_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged client configuration.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    An empty API key is treated as unset.
    """
    _load_dotenv_once()
    cfg: Dict[str, Any] = dict(DEFAULTS)
    cfg |= _load_external_config()
    cfg |= env_overrides()
    if not cfg.get("api_key"):
        cfg.pop("api_key", None)
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return _coerce_ints(cfg)


def reset_config_cache() -> None:
    """Forget the cached config file and dotenv state (tests, reloads)."""
    global _FILE_CACHE, _DOTENV_LOADED
    _FILE_CACHE = None
    _DOTENV_LOADED = False


__all__ = [
    "get_client_config",
    "reset_config_cache",
    "DEFAULTS",
]
