"""Cooperative cancellation for provider calls.

Purpose
-------
Give callers a handle they can pass to ``list_models`` / ``ask``: a
``CancellationToken`` may be cancelled from another thread and may carry a
wall-clock deadline. The transport helper checks the token before each HTTP
round trip and caps the httpx timeout by the time left until the deadline.

Notes
-----
Cancellation is cooperative: an HTTP call already on the wire is bounded by
its timeout, not interrupted.
"""
from __future__ import annotations

import time
from threading import Lock
from typing import Optional


class CancellationToken:
    """A cooperative cancellation token with an optional deadline.

    Parameters
    ----------
    timeout:
        Optional number of seconds from construction after which the token
        reports itself as cancelled with reason ``"deadline exceeded"``.
    """

    def __init__(self, *, timeout: Optional[float] = None) -> None:
        self._lock = Lock()
        self._cancelled = False
        self._reason: Optional[str] = None
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    @property
    def cancelled(self) -> bool:
        """Whether cancellation was requested or the deadline has passed."""
        if self._cancelled:
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            self.cancel("deadline exceeded")
            return True
        return False

    @property
    def reason(self) -> Optional[str]:
        """Reason string supplied at cancel time (if any)."""
        return self._reason

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, ``None`` when no deadline is set."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def cancel(self, reason: Optional[str] = None) -> None:
        """Request cancellation; the first reason wins."""
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            self._reason = reason

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self._cancelled}, reason={self._reason!r})"


__all__ = ["CancellationToken"]
