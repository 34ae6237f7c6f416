"""
Map arbitrary exceptions onto :class:`ErrorCode` values.

The CLI tags ``cli.error`` log events with the result, and the transport
helper uses :func:`is_retryable_status` to set the retry hint on HTTP
failures.
"""
from __future__ import annotations

from typing import FrozenSet, Optional

import httpx
from pydantic import ValidationError

from .error_code import ErrorCode
from .provider_error import ProviderError

# Statuses worth a retry hint; nothing in this package retries on them.
_TRANSIENT_STATUSES: FrozenSet[int] = frozenset({408, 429, 500, 502, 503, 504})


def _valid_status(value: object) -> Optional[int]:
    if isinstance(value, int) and 100 <= value < 600:
        return value
    return None


def _extract_status(exc: Exception) -> Optional[int]:
    """Read an HTTP status from ``exc.status_code`` or ``exc.response.status_code``."""
    found = _valid_status(getattr(exc, "status_code", None))
    if found is None:
        found = _valid_status(getattr(getattr(exc, "response", None), "status_code", None))
    return found


def is_retryable_status(status: Optional[int]) -> bool:
    """Return ``True`` when an HTTP status usually indicates a transient failure."""
    return status in _TRANSIENT_STATUSES


def classify_exception(exc: Exception) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Checked in order: a ``ProviderError`` keeps its own code, httpx transport
    failures and timeouts are ``TRANSPORT``, pydantic validation failures are
    ``DECODE``, anything else carrying an HTTP status is ``TRANSPORT``, and
    the rest is ``UNKNOWN``.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (httpx.TransportError, TimeoutError)):
        return ErrorCode.TRANSPORT
    if isinstance(exc, ValidationError):
        return ErrorCode.DECODE
    if _extract_status(exc) is not None:
        return ErrorCode.TRANSPORT
    return ErrorCode.UNKNOWN


__all__ = [
    "classify_exception",
    "is_retryable_status",
]
