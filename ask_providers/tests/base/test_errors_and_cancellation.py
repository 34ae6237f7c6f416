"""Error classification and cancellation token behavior."""

from __future__ import annotations

import time

import httpx
import pytest
from pydantic import BaseModel, ValidationError

from ask_providers.base.cancellation import CancellationToken
from ask_providers.base.errors import ErrorCode, ProviderError, classify_exception, is_retryable_status


class _Strict(BaseModel):
    n: int


class _WithStatus(Exception):
    status_code = 502


def _validation_error() -> ValidationError:
    try:
        _Strict.model_validate({"n": "not-a-number"})
    except ValidationError as exc:
        return exc
    raise AssertionError("expected a ValidationError")


def test_classify_exception_precedence() -> None:
    err = ProviderError(ErrorCode.CONTENT, "empty", "openai")
    assert classify_exception(err) is ErrorCode.CONTENT
    assert classify_exception(httpx.ConnectError("down")) is ErrorCode.TRANSPORT
    assert classify_exception(TimeoutError()) is ErrorCode.TRANSPORT
    assert classify_exception(_validation_error()) is ErrorCode.DECODE
    assert classify_exception(_WithStatus()) is ErrorCode.TRANSPORT
    assert classify_exception(RuntimeError("?")) is ErrorCode.UNKNOWN


@pytest.mark.parametrize("status, expected", [(None, False), (200, False), (429, True), (500, True), (501, False)])
def test_is_retryable_status(status, expected) -> None:
    assert is_retryable_status(status) is expected


def test_provider_error_str_includes_context() -> None:
    err = ProviderError(ErrorCode.TRANSPORT, "boom", "gemini", model="flash")
    assert str(err) == "[transport] gemini/flash: boom"
    assert str(ProviderError(ErrorCode.CONTENT, "empty", "ollama")) == "[content] ollama: empty"


def test_cancel_keeps_first_reason() -> None:
    token = CancellationToken()

    token.cancel("stop")
    token.cancel("later")

    assert token.cancelled
    assert token.reason == "stop"


def test_deadline_expires() -> None:
    token = CancellationToken(timeout=0.01)
    time.sleep(0.03)
    assert token.cancelled
    assert token.reason == "deadline exceeded"
    assert token.remaining() == 0.0


def test_token_without_deadline() -> None:
    token = CancellationToken()
    assert token.remaining() is None
    assert not token.cancelled
    assert token.reason is None
