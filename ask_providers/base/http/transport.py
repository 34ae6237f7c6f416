"""JSON-over-HTTP transport helper shared by every adapter.

Purpose:
    ``do_json`` is the single chokepoint that turns an adapter's request into
    an HTTP round trip and its response into a typed envelope. All error
    message shaping happens here, which is what lets the adapters' format
    fallback inspect one consistent error text.

Flow:
    1. Check the cancellation token.
    2. JSON-encode the payload (``Content-Type: application/json``).
    3. Execute the call on the caller's ``httpx.Client`` with the per-call
       timeout, capped by the token's deadline.
    4. Status >= 400 becomes ``ProviderError(TRANSPORT)`` carrying the body
       truncated to ``ERROR_BODY_LIMIT_BYTES``.
    5. Otherwise the body is validated into a pydantic envelope; a blank body
       yields an empty envelope.

Failure modes:
    - ``TRANSPORT``: encode failure, network error, timeout, cancellation,
      HTTP error status.
    - ``DECODE``: body is not JSON or does not fit the envelope.
"""
from __future__ import annotations

import json
import logging
import time
from typing import Any, Mapping, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..cancellation import CancellationToken
from ..constants import ERROR_BODY_LIMIT_BYTES
from ..errors import ErrorCode, ProviderError, is_retryable_status
from ..logging import LogContext, get_logger, log_event
from ..utils.text import truncate

EnvelopeT = TypeVar("EnvelopeT", bound=BaseModel)

_logger = get_logger("ask.providers.http")


def clean_headers(headers: Optional[Mapping[str, str]]) -> dict[str, str]:
    """Drop header entries whose name or value is blank."""
    out: dict[str, str] = {}
    for key, value in (headers or {}).items():
        if not str(key).strip() or not str(value).strip():
            continue
        out[key] = value
    return out


def _effective_timeout(timeout: Optional[float], cancel_token: Optional[CancellationToken]) -> Optional[float]:
    candidates = [t for t in (timeout, cancel_token.remaining() if cancel_token else None) if t is not None]
    return min(candidates) if candidates else None


def _summarize_validation(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors()[:3]:
        loc = ".".join(str(p) for p in err.get("loc", ())) or "body"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts) or str(exc)


def do_json(
    client: httpx.Client,
    method: str,
    url: str,
    *,
    provider: str,
    model: Optional[str] = None,
    headers: Optional[Mapping[str, str]] = None,
    payload: Any = None,
    envelope: Optional[Type[EnvelopeT]] = None,
    timeout: Optional[float] = None,
    cancel_token: Optional[CancellationToken] = None,
) -> Optional[EnvelopeT]:
    """Execute one HTTP call and decode its JSON body into ``envelope``.

    Parameters
    ----------
    client:
        The adapter's ``httpx.Client`` (injected or pooled).
    method, url:
        HTTP verb and absolute URL.
    provider, model:
        Attached to raised errors and log events.
    headers:
        Request headers; ``Content-Type`` is added when ``payload`` is given.
    payload:
        JSON-serializable request body, or ``None`` for no body.
    envelope:
        Pydantic model describing the expected response; ``None`` discards
        the body.
    timeout:
        Per-call timeout override in seconds.
    cancel_token:
        Optional token checked before the call; its deadline caps the timeout.

    Returns
    -------
    Optional[EnvelopeT]
        The decoded envelope, an empty envelope for a blank body, or ``None``
        when no envelope was requested.

    Raises
    ------
    ProviderError
        ``TRANSPORT`` or ``DECODE`` as described in the module docstring.
    """
    ctx = LogContext(provider=provider, model=model)
    if cancel_token is not None and cancel_token.cancelled:
        raise ProviderError(
            ErrorCode.TRANSPORT,
            f"request cancelled: {cancel_token.reason or 'operation cancelled'}",
            provider,
            model,
        )

    req_headers = dict(headers or {})
    content: Optional[bytes] = None
    if payload is not None:
        try:
            content = json.dumps(payload).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise ProviderError(
                ErrorCode.TRANSPORT, f"encode request JSON: {exc}", provider, model, raw=exc
            ) from exc
        req_headers["Content-Type"] = "application/json"

    effective = _effective_timeout(timeout, cancel_token)
    started = time.perf_counter()
    log_event(_logger, "http.request", ctx, method=method, url=url)
    try:
        response = client.request(
            method,
            url,
            content=content,
            headers=req_headers,
            timeout=effective if effective is not None else httpx.USE_CLIENT_DEFAULT,
        )
    except httpx.HTTPError as exc:
        log_event(_logger, "http.error", ctx, level=logging.WARNING, method=method, url=url, error=str(exc))
        raise ProviderError(
            ErrorCode.TRANSPORT,
            f"http request failed: {str(exc) or type(exc).__name__}",
            provider,
            model,
            retryable=True,
            raw=exc,
        ) from exc

    latency_ms = round((time.perf_counter() - started) * 1000, 1)
    log_event(
        _logger, "http.response", ctx, method=method, url=url, status=response.status_code, latency_ms=latency_ms
    )

    if response.status_code >= 400:
        status = f"{response.status_code} {response.reason_phrase}".strip()
        raise ProviderError(
            ErrorCode.TRANSPORT,
            f"provider returned {status}: {truncate(response.text, ERROR_BODY_LIMIT_BYTES)}",
            provider,
            model,
            status_code=response.status_code,
            retryable=is_retryable_status(response.status_code),
        )

    if envelope is None:
        return None
    if not response.content.strip():
        return envelope()
    try:
        return envelope.model_validate_json(response.content)
    except ValidationError as exc:
        raise ProviderError(
            ErrorCode.DECODE,
            f"decode response JSON: {_summarize_validation(exc)}; "
            f"body={truncate(response.text, ERROR_BODY_LIMIT_BYTES)}",
            provider,
            model,
            raw=exc,
        ) from exc


__all__ = ["do_json", "clean_headers"]
