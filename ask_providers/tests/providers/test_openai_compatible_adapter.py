"""Adapter tests for the OpenAI-compatible family (openai, openrouter, custom).

All HTTP goes through ``httpx.MockTransport`` via the ``recorder`` fixture.
"""

from __future__ import annotations

import json

import httpx
import pytest

from ask_providers.base.dto import ClientOptions, OpenAICompatibleSettings
from ask_providers.base.errors import ErrorCode, ProviderError
from ask_providers.base.models import AskRequest
from ask_providers.openai import OpenAIClient
from ask_providers.openai_compatible import OpenAICompatibleClient
from ask_providers.openrouter import OpenRouterClient

BASE = "https://mock.test/v1"


def _chat_reply(content) -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


def _request(**overrides) -> AskRequest:
    fields = {"model": "gpt-4o-mini", "prompt": "be brief", "question": "list files", "expect_json": True}
    fields.update(overrides)
    return AskRequest(**fields)


def test_list_models_sorted_and_blank_ids_dropped(recorder) -> None:
    rec = recorder(lambda req: httpx.Response(200, json={"data": [{"id": "b"}, {"id": " "}, {"id": "a"}]}))
    client = OpenAIClient(ClientOptions(api_key="sk-test", base_url=BASE, http_client=rec.client()))

    models = client.list_models()

    assert [m.id for m in models] == ["a", "b"]
    assert models[0].display_name == "a"
    assert str(rec.requests[0].url) == f"{BASE}/models"
    assert rec.requests[0].headers["Authorization"] == "Bearer sk-test"


def test_ask_returns_exact_json_text(recorder) -> None:
    text = '{"answer":"ok","command":""}'
    rec = recorder(lambda req: _chat_reply(text))
    client = OpenAIClient(ClientOptions(api_key="sk-test", base_url=BASE, http_client=rec.client()))

    resp = client.ask(_request())

    assert resp.text == text
    body = rec.json_body()
    assert body["model"] == "gpt-4o-mini"
    assert body["temperature"] == 0.2
    assert body["response_format"] == {"type": "json_object"}
    assert body["messages"] == [
        {"role": "system", "content": "be brief"},
        {"role": "user", "content": "list files"},
    ]
    assert str(rec.requests[0].url) == f"{BASE}/chat/completions"


def test_ask_without_expect_json_omits_response_format(recorder) -> None:
    rec = recorder(lambda req: _chat_reply("plain"))
    client = OpenAIClient(ClientOptions(api_key="k", base_url=BASE, http_client=rec.client()))

    client.ask(_request(expect_json=False))

    assert "response_format" not in rec.json_body()


def test_empty_question_fails_before_http(recorder) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no HTTP call expected")

    rec = recorder(handler)
    client = OpenAIClient(ClientOptions(api_key="k", base_url=BASE, http_client=rec.client()))

    with pytest.raises(ProviderError) as info:
        client.ask(_request(question="   "))

    assert info.value.code is ErrorCode.VALIDATION
    assert rec.requests == []


def test_missing_key_is_configuration_error(recorder) -> None:
    rec = recorder(lambda req: _chat_reply("x"))
    client = OpenRouterClient(ClientOptions(http_client=rec.client()))

    with pytest.raises(ProviderError) as info:
        client.list_models()

    assert info.value.code is ErrorCode.CONFIGURATION
    assert "openrouter" in info.value.message
    assert rec.requests == []


def test_openrouter_default_base_url(recorder) -> None:
    rec = recorder(lambda req: httpx.Response(200, json={"data": []}))
    client = OpenRouterClient(ClientOptions(api_key="k", http_client=rec.client()))

    assert client.list_models() == []
    assert str(rec.requests[0].url) == "https://openrouter.ai/api/v1/models"


def test_format_fallback_retries_exactly_once(recorder) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        if "response_format" in body:
            return httpx.Response(400, json={"error": {"message": "Unsupported parameter: response_format"}})
        return _chat_reply('{"answer":"fine","command":""}')

    rec = recorder(handler)
    client = OpenAIClient(ClientOptions(api_key="k", base_url=BASE, http_client=rec.client()))

    resp = client.ask(_request())

    assert len(rec.requests) == 2
    assert "response_format" not in rec.json_body(1)
    assert resp.text == '{"answer":"fine","command":""}'


def test_unrelated_error_is_not_retried(recorder) -> None:
    rec = recorder(lambda req: httpx.Response(401, text="invalid api key"))
    client = OpenAIClient(ClientOptions(api_key="k", base_url=BASE, http_client=rec.client()))

    with pytest.raises(ProviderError) as info:
        client.ask(_request())

    assert len(rec.requests) == 1
    assert info.value.status_code == 401
    assert "invalid api key" in info.value.message


def test_array_content_is_joined(recorder) -> None:
    parts = [{"type": "text", "text": "a"}, {"type": "image"}, {"type": "text", "text": "b"}]
    rec = recorder(lambda req: _chat_reply(parts))
    client = OpenAIClient(ClientOptions(api_key="k", base_url=BASE, http_client=rec.client()))

    assert client.ask(_request()).text == "a\nb"


@pytest.mark.parametrize(
    "payload, fragment",
    [
        ({"choices": []}, "no choices returned by openai"),
        ({"choices": [{"message": {"content": "   "}}]}, "content was empty"),
        ({"choices": [{"message": {"content": 42}}]}, "unsupported content type"),
    ],
)
def test_bad_content_is_content_error(recorder, payload, fragment) -> None:
    rec = recorder(lambda req: httpx.Response(200, json=payload))
    client = OpenAIClient(ClientOptions(api_key="k", base_url=BASE, http_client=rec.client()))

    with pytest.raises(ProviderError) as info:
        client.ask(_request())

    assert info.value.code is ErrorCode.CONTENT
    assert fragment in info.value.message


def test_custom_provider_paths_auth_and_headers(recorder) -> None:
    rec = recorder(lambda req: httpx.Response(200, json={"data": [{"id": "local-model"}]}))
    settings = OpenAICompatibleSettings(
        name="MyProxy",
        models_path="v2/models",
        chat_path="/v2/chat",
        auth_header="X-Api-Key",
        auth_prefix=" ",
    )
    options = ClientOptions(
        api_key="secret",
        base_url="https://proxy.test/",
        headers={"X-Team": "ops", "X-Blank": " "},
        http_client=rec.client(),
    )
    client = OpenAICompatibleClient(settings, options)

    assert client.name == "myproxy"
    assert [m.id for m in client.list_models()] == ["local-model"]
    sent = rec.requests[0]
    assert str(sent.url) == "https://proxy.test/v2/models"
    assert sent.headers["X-Api-Key"] == " secret"
    assert sent.headers["X-Team"] == "ops"
    assert "X-Blank" not in sent.headers
    assert "Authorization" not in sent.headers


def test_custom_provider_without_key_sends_no_auth(recorder) -> None:
    rec = recorder(lambda req: _chat_reply("hi"))
    client = OpenAICompatibleClient(
        OpenAICompatibleSettings(name="local"),
        ClientOptions(base_url="http://localhost:8080/v1", http_client=rec.client()),
    )

    assert client.ask(_request(expect_json=False)).text == "hi"
    assert "Authorization" not in rec.requests[0].headers
