from __future__ import annotations

import httpx
import pytest

from ask_providers.base.dto import ClientOptions
from ask_providers.base.errors import ErrorCode, ProviderError
from ask_providers.base.models import AskRequest
from ask_providers.ollama import OllamaClient


def test_list_models_from_tags(recorder) -> None:
    rec = recorder(lambda req: httpx.Response(200, json={"models": [{"name": "llama3:8b"}, {"name": "gemma:2b"}]}))
    client = OllamaClient(ClientOptions(http_client=rec.client()))

    assert [m.id for m in client.list_models()] == ["gemma:2b", "llama3:8b"]
    assert str(rec.requests[0].url) == "http://127.0.0.1:11434/api/tags"
    assert "Authorization" not in rec.requests[0].headers


def test_ask_sets_json_format_and_trims(recorder) -> None:
    rec = recorder(lambda req: httpx.Response(200, json={"message": {"role": "assistant", "content": "  {}\n"}}))
    client = OllamaClient(ClientOptions(base_url="http://gpu-box:11434/", http_client=rec.client()))

    resp = client.ask(AskRequest(model="llama3:8b", prompt="sys", question="q", expect_json=True))

    assert resp.text == "{}"
    assert str(rec.requests[0].url) == "http://gpu-box:11434/api/chat"
    body = rec.json_body()
    assert body["format"] == "json"
    assert body["stream"] is False
    assert [m["role"] for m in body["messages"]] == ["system", "user"]


def test_ask_plain_has_no_format(recorder) -> None:
    rec = recorder(lambda req: httpx.Response(200, json={"message": {"content": "hello"}}))
    client = OllamaClient(ClientOptions(http_client=rec.client()))

    client.ask(AskRequest(model="m", prompt="p", question="q"))

    assert "format" not in rec.json_body()


def test_empty_content(recorder) -> None:
    rec = recorder(lambda req: httpx.Response(200, json={"message": {"content": ""}}))
    client = OllamaClient(ClientOptions(http_client=rec.client()))

    with pytest.raises(ProviderError) as info:
        client.ask(AskRequest(model="m", prompt="p", question="q"))

    assert info.value.code is ErrorCode.CONTENT


def test_extra_headers_are_forwarded(recorder) -> None:
    rec = recorder(lambda req: httpx.Response(200, json={"models": [], "message": {"content": "ok"}}))
    client = OllamaClient(ClientOptions(headers={"X-Team": "ops", " ": "dropped"}, http_client=rec.client()))

    client.list_models()
    client.ask(AskRequest(model="m", prompt="p", question="q"))

    for sent in rec.requests:
        assert sent.headers.get("X-Team") == "ops"
    assert len(rec.requests) == 2


def test_empty_question_fails_before_http(recorder) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no HTTP call expected")

    rec = recorder(handler)
    client = OllamaClient(ClientOptions(http_client=rec.client()))

    with pytest.raises(ProviderError) as info:
        client.ask(AskRequest(model="llama3:8b", prompt="p", question="  "))

    assert info.value.code is ErrorCode.VALIDATION
    assert rec.requests == []
