from __future__ import annotations

import pytest

from ask_providers.anthropic import AnthropicClient
from ask_providers.base.dto import ClientOptions, OpenAICompatibleSettings
from ask_providers.base.factory import (
    UnknownProviderError,
    create_client,
    create_openai_compatible,
    supported_providers,
)
from ask_providers.ollama import OllamaClient
from ask_providers.openai_compatible import OpenAICompatibleClient


def test_supported_providers_sorted() -> None:
    assert supported_providers() == ["anthropic", "gemini", "ollama", "openai", "openrouter"]


def test_create_client_normalizes_name() -> None:
    client = create_client("  Anthropic ", ClientOptions(api_key="k"))
    assert isinstance(client, AnthropicClient)
    assert client.name == "anthropic"


def test_create_client_without_options() -> None:
    assert isinstance(create_client("ollama"), OllamaClient)


@pytest.mark.parametrize("name, message", [("", "provider name is required"), ("acme", "unsupported provider 'acme'")])
def test_create_client_errors(name, message) -> None:
    with pytest.raises(UnknownProviderError, match=message):
        create_client(name)


def test_create_openai_compatible_requires_base_url() -> None:
    with pytest.raises(UnknownProviderError, match="base URL is required"):
        create_openai_compatible(OpenAICompatibleSettings(name="proxy"), ClientOptions(base_url="  "))


def test_create_openai_compatible_requires_name() -> None:
    with pytest.raises(UnknownProviderError, match="provider name is required"):
        create_openai_compatible(OpenAICompatibleSettings(name=" "), ClientOptions(base_url="http://x"))


def test_create_openai_compatible_normalizes_name() -> None:
    client = create_openai_compatible(
        OpenAICompatibleSettings(name="MyProxy"), ClientOptions(base_url="http://localhost:8080/v1")
    )
    assert isinstance(client, OpenAICompatibleClient)
    assert client.name == "myproxy"


def test_registry_import_failure(monkeypatch) -> None:
    from ask_providers.base import factory

    monkeypatch.setattr(factory, "_PROVIDERS", {"bogus": {"module": "does.not.exist", "class": "X"}})
    with pytest.raises(ModuleNotFoundError):
        create_client("bogus")
