"""Shared HTTP clients for the API client.

Purpose:
    Provide a thread-safe cache of reusable ``httpx.Client`` instances so
    repeated calls against the same endpoint share a connection pool, plus a
    factory for short-lived ``httpx.AsyncClient`` instances (async clients are
    bound to the event loop that uses them, so they are not cached).

External dependencies:
    - ``httpx`` for the underlying synchronous and asynchronous clients.

Lifecycle & cleanup:
    - Sync clients are cached by ``(base_url, purpose, timeout)``. Purposes
      allow distinct pools (e.g., "chat" vs "stream").
    - All cached clients are closed at interpreter exit via ``atexit``.
      Tests may also call :func:`close_all_clients` explicitly.
"""

from __future__ import annotations

import atexit
import contextlib
import threading
from typing import Dict, Optional, Tuple

import httpx

_CLIENTS: Dict[Tuple[Optional[str], str, Optional[float]], httpx.Client] = {}
_LOCK = threading.RLock()


def _timeout(seconds: Optional[float]) -> httpx.Timeout:
    return httpx.Timeout(seconds)


def get_httpx_client(base_url: Optional[str], purpose: str, timeout: Optional[float] = None) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given base URL and purpose.

    Parameters:
        base_url: API base URL set on the client; ``None`` groups clients
            under a shared key.
        purpose: Short string discriminating separate pools (e.g. "chat",
            "stream"). Keep stable to maximize reuse.
        timeout: Overall request timeout in seconds (``None`` disables it).

    Thread-safety:
        Safe for concurrent use; per-key creation is guarded by a re-entrant lock.
    """
    key = (base_url, purpose, timeout)
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        if base_url:
            client = httpx.Client(base_url=base_url, timeout=_timeout(timeout))
        else:
            client = httpx.Client(timeout=_timeout(timeout))
        _CLIENTS[key] = client
        return client


def new_async_client(base_url: Optional[str] = None, timeout: Optional[float] = None) -> httpx.AsyncClient:
    """Create an ``httpx.AsyncClient``; the caller owns it and must close it."""
    if base_url:
        return httpx.AsyncClient(base_url=base_url, timeout=_timeout(timeout))
    return httpx.AsyncClient(timeout=_timeout(timeout))


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            # interpreter teardown: transport close failures are not actionable
            with contextlib.suppress(Exception):
                c.close()
        _CLIENTS.clear()


def _cleanup_at_exit() -> None:
    close_all_clients()


atexit.register(_cleanup_at_exit)

__all__ = ["get_httpx_client", "new_async_client", "close_all_clients"]
