"""Request preconditions and the format-unsupported heuristic.

Every adapter calls :func:`validate_ask_request` before touching the network.
:func:`format_likely_unsupported` decides whether a failed JSON-mode request
earns its single retry without the format directive.
"""
from __future__ import annotations

from typing import Optional

from .constants import FORMAT_UNSUPPORTED_MARKERS
from .errors import ErrorCode, ProviderError
from .models import AskRequest


def validate_ask_request(request: AskRequest, provider: str) -> None:
    """Raise ``ProviderError(VALIDATION)`` when model or question is blank."""
    if not (request.model or "").strip():
        raise ProviderError(ErrorCode.VALIDATION, "model is required", provider)
    if not (request.question or "").strip():
        raise ProviderError(ErrorCode.VALIDATION, "question is required", provider, request.model)


def format_likely_unsupported(exc: Optional[BaseException]) -> bool:
    """Return ``True`` when an error suggests the JSON-mode directive was rejected.

    The match is a case-insensitive substring search for ``response_format``,
    ``responsemimetype`` or ``response_mime_type`` in the error message. It is
    a heuristic: providers whose rejection text names the field differently
    are not detected.
    """
    if exc is None:
        return False
    text = exc.message if isinstance(exc, ProviderError) else str(exc)
    lowered = text.lower()
    return any(marker in lowered for marker in FORMAT_UNSUPPORTED_MARKERS)


__all__ = ["validate_ask_request", "format_likely_unsupported"]
