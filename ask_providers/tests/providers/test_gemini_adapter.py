"""Gemini adapter tests: model filtering, id routing and the mime-type fallback."""

from __future__ import annotations

import json

import httpx
import pytest

from ask_providers.base.dto import ClientOptions
from ask_providers.base.errors import ErrorCode, ProviderError
from ask_providers.base.models import AskRequest
from ask_providers.gemini import GeminiClient

BASE = "https://gemini.mock/v1beta"


def _client(rec, api_key: str = "g-key", **opts) -> GeminiClient:
    return GeminiClient(ClientOptions(api_key=api_key, base_url=BASE, http_client=rec.client(), **opts))


def _generate_reply(*texts: str) -> httpx.Response:
    parts = [{"text": t} for t in texts]
    return httpx.Response(200, json={"candidates": [{"content": {"parts": parts}}]})


def test_list_models_filters_generate_content(recorder) -> None:
    data = {
        "models": [
            {
                "name": "models/gemini-2.0-flash",
                "displayName": "Gemini 2.0 Flash",
                "supportedGenerationMethods": ["generateContent", "countTokens"],
            },
            {"name": "models/text-embedding-004", "supportedGenerationMethods": ["embedContent"]},
            {"name": "models/gemini-1.5-pro", "supportedGenerationMethods": ["GENERATECONTENT"]},
        ]
    }
    rec = recorder(lambda req: httpx.Response(200, json=data))

    models = _client(rec).list_models()

    assert [m.id for m in models] == ["gemini-1.5-pro", "gemini-2.0-flash"]
    assert models[0].display_name == "gemini-1.5-pro"
    assert models[1].display_name == "Gemini 2.0 Flash"
    assert rec.requests[0].headers["x-goog-api-key"] == "g-key"


def test_prefixed_model_routes_to_bare_id(recorder) -> None:
    rec = recorder(lambda req: _generate_reply('{"answer":"hi","command":""}'))

    resp = _client(rec).ask(
        AskRequest(model="models/gemini-2.0-flash", prompt="sys", question="q", expect_json=True)
    )

    assert resp.text == '{"answer":"hi","command":""}'
    assert str(rec.requests[0].url) == f"{BASE}/models/gemini-2.0-flash:generateContent"
    body = rec.json_body()
    assert body["systemInstruction"] == {"parts": [{"text": "sys"}]}
    assert body["contents"] == [{"role": "user", "parts": [{"text": "q"}]}]
    assert body["generationConfig"] == {"temperature": 0.2, "responseMimeType": "application/json"}


def test_prefix_only_model_is_validation_error(recorder) -> None:
    rec = recorder(lambda req: _generate_reply("x"))

    with pytest.raises(ProviderError) as info:
        _client(rec).ask(AskRequest(model="models/", prompt="p", question="q"))

    assert info.value.code is ErrorCode.VALIDATION
    assert rec.requests == []


def test_mime_type_fallback_takes_two_calls(recorder) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if "responseMimeType" in json.loads(request.content)["generationConfig"]:
            return httpx.Response(400, text='{"error":{"message":"Invalid JSON payload: unknown name responseMimeType"}}')
        return _generate_reply("a", "  ", "b")

    rec = recorder(handler)

    resp = _client(rec).ask(AskRequest(model="gemini-2.0-flash", prompt="p", question="q", expect_json=True))

    assert len(rec.requests) == 2
    assert rec.json_body(1)["generationConfig"] == {"temperature": 0.2}
    assert resp.text == "a\nb"


def test_extra_headers_can_override_key_header(recorder) -> None:
    rec = recorder(lambda req: _generate_reply("ok"))

    _client(rec, headers={"x-goog-api-key": "from-headers"}).ask(AskRequest(model="m", prompt="p", question="q"))

    assert rec.requests[0].headers["x-goog-api-key"] == "from-headers"


@pytest.mark.parametrize(
    "reply, message",
    [
        ({"candidates": []}, "no candidates returned by Gemini"),
        ({"candidates": [{"content": {"parts": [{"text": " "}]}}]}, "Gemini response had no text parts"),
    ],
)
def test_empty_replies_are_content_errors(recorder, reply, message) -> None:
    rec = recorder(lambda req: httpx.Response(200, json=reply))

    with pytest.raises(ProviderError) as info:
        _client(rec).ask(AskRequest(model="m", prompt="p", question="q"))

    assert info.value.code is ErrorCode.CONTENT
    assert info.value.message == message


def test_missing_key(recorder) -> None:
    rec = recorder(lambda req: httpx.Response(200, json={}))

    with pytest.raises(ProviderError) as info:
        _client(rec, api_key=" ").list_models()

    assert info.value.code is ErrorCode.CONFIGURATION
    assert info.value.message == "GEMINI_API_KEY not configured"


def test_empty_question_fails_before_http(recorder) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no HTTP call expected")

    rec = recorder(handler)

    with pytest.raises(ProviderError) as info:
        _client(rec).ask(AskRequest(model="gemini-2.0-flash", prompt="p", question=" \n"))

    assert info.value.code is ErrorCode.VALIDATION
    assert info.value.message == "question is required"
    assert rec.requests == []


def test_null_list_items_are_zero_filled(recorder) -> None:
    data = {
        "models": [
            None,
            {"name": "models/gemini-2.0-flash", "supportedGenerationMethods": [None, "generateContent"]},
        ]
    }
    rec = recorder(lambda req: httpx.Response(200, json=data))

    assert [m.id for m in _client(rec).list_models()] == ["gemini-2.0-flash"]

    rec = recorder(lambda req: httpx.Response(200, json={"candidates": [{"content": {"parts": [None, {"text": "ok"}]}}]}))

    assert _client(rec).ask(AskRequest(model="gemini-2.0-flash", prompt="p", question="q")).text == "ok"
