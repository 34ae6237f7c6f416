"""``ProviderError``: the one exception type adapters raise.

The CLI prints ``message`` verbatim, and the format-fallback heuristic reads
the same field, so transport code is careful to put the provider's response
text there.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """A failed provider call tagged with an :class:`ErrorCode`.

    Attributes:
        code: Failure category.
        message: User-facing text, e.g. ``"provider returned 401 Unauthorized: ..."``.
        provider: Canonical provider name (``"openai"``, ``"myproxy"``).
        model: Model id of the call, when there was one.
        status_code: HTTP status for ``>= 400`` responses.
        retryable: Set for network errors and transient statuses. Nothing in
            this package retries on it.
        raw: Underlying exception, kept for ``__cause__``-style diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    status_code: Optional[int] = None
    retryable: bool = False
    raw: Optional[Exception] = None

    def __str__(self) -> str:
        where = f"{self.provider}/{self.model}" if self.model else self.provider
        return f"[{self.code.value}] {where}: {self.message}"


__all__ = ["ProviderError"]
