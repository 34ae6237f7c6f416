"""Pooled ``httpx.Client`` instances for adapters built without one.

Keys:
    ``(base_url, purpose, timeout)``. ``purpose`` is the provider name, so two
    custom proxies on the same host still get separate clients.

Timeouts:
    The pooled client's default comes from ``ClientOptions.timeout`` (60s).
    ``do_json`` overrides it per request with the caller's timeout or the
    cancellation deadline, whichever is sooner.

Cleanup:
    :func:`close_all_clients` runs at interpreter exit and may be called
    directly.
"""

from __future__ import annotations

import atexit
import contextlib
import threading
from typing import Dict, Optional, Tuple

import httpx

from ..constants import DEFAULT_HTTP_TIMEOUT

_CLIENTS: Dict[Tuple[Optional[str], str, float], httpx.Client] = {}
_LOCK = threading.RLock()


def get_httpx_client(
    base_url: Optional[str],
    purpose: str,
    timeout: float = DEFAULT_HTTP_TIMEOUT,
) -> httpx.Client:
    """Return the pooled client for ``(base_url, purpose, timeout)``, creating it once."""
    key = (base_url, purpose, float(timeout))
    client = _CLIENTS.get(key)
    if client is not None:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None:
            return client
        client = httpx.Client(base_url=base_url or "", timeout=timeout)
        _CLIENTS[key] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            # best-effort teardown
            with contextlib.suppress(httpx.HTTPError, OSError, RuntimeError):
                c.close()
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]
