"""Pytest configuration for the ask_providers test suite.

Provides an isolated config directory and a recording ``httpx.MockTransport``
so adapter and CLI tests never touch the network or the real home directory.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Iterator, List

import httpx
import pytest

_PROVIDER_ENV_VARS = (
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "OPENROUTER_API_KEY",
    "ASK_CONFIG",
    "ASK_LOG_FILE",
)


class RecordingTransport:
    """Route requests to ``handler`` and keep every request for assertions."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self._handler = handler
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))

    def json_body(self, index: int = -1) -> Dict[str, Any]:
        return json.loads(self.requests[index].content)


@pytest.fixture()
def recorder() -> Callable[[Callable[[httpx.Request], httpx.Response]], RecordingTransport]:
    """Factory fixture: ``recorder(handler)`` returns a ``RecordingTransport``."""
    return RecordingTransport


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Point config at a temp dir and clear provider key variables."""
    for name in _PROVIDER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("ASK_CONFIG_DIR", str(tmp_path / "askcfg"))
    yield
