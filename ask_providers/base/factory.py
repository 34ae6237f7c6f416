"""Provider registry.

Purpose
-------
Map canonical provider names to adapter classes and construct clients from
``ClientOptions``. Adapter modules are imported lazily with ``importlib`` so
that importing the registry never pulls in every adapter.

Failure modes
-------------
- Empty or unknown names raise :class:`UnknownProviderError`.
- Custom OpenAI-compatible providers additionally require a base URL.
- Adapter constructors do no I/O, so construction itself does not fail for
  missing keys; that surfaces on the first call as ``CONFIGURATION``.
"""

from __future__ import annotations

from importlib import import_module
from typing import Dict, List, Optional

from .dto import ClientOptions, OpenAICompatibleSettings
from .interfaces import ProviderClient
from .utils import normalize_name


class UnknownProviderError(ValueError):
    """Raised when a provider cannot be resolved from its name or settings."""


_PROVIDERS: Dict[str, Dict[str, str]] = {
    "anthropic": {"module": "ask_providers.anthropic.client", "class": "AnthropicClient"},
    "gemini": {"module": "ask_providers.gemini.client", "class": "GeminiClient"},
    "ollama": {"module": "ask_providers.ollama.client", "class": "OllamaClient"},
    "openai": {"module": "ask_providers.openai.client", "class": "OpenAIClient"},
    "openrouter": {"module": "ask_providers.openrouter.client", "class": "OpenRouterClient"},
}


def create_client(name: str, options: Optional[ClientOptions] = None) -> ProviderClient:
    """Return a built-in provider client by name.

    Parameters
    ----------
    name:
        Provider name; trimmed and lowercased before lookup.
    options:
        Key, base URL, headers and optional ``httpx.Client``.

    Raises
    ------
    UnknownProviderError
        If the name is blank or not a built-in provider.
    """
    canonical = normalize_name(name)
    if not canonical:
        raise UnknownProviderError("provider name is required")
    spec = _PROVIDERS.get(canonical)
    if spec is None:
        raise UnknownProviderError(f"unsupported provider '{canonical}'")
    klass = getattr(import_module(spec["module"]), spec["class"])
    return klass(options or ClientOptions())


def create_openai_compatible(
    settings: OpenAICompatibleSettings, options: Optional[ClientOptions] = None
) -> ProviderClient:
    """Return a client for a user-defined OpenAI-compatible endpoint."""
    from ..openai_compatible.client import OpenAICompatibleClient

    options = options or ClientOptions()
    canonical = normalize_name(settings.name)
    if not canonical:
        raise UnknownProviderError("provider name is required")
    if not options.base_url.strip():
        raise UnknownProviderError("base URL is required")
    return OpenAICompatibleClient(settings.model_copy(update={"name": canonical}), options)


def supported_providers() -> List[str]:
    """Return the built-in provider names in sorted order."""
    return sorted(_PROVIDERS)


__all__ = ["UnknownProviderError", "create_client", "create_openai_compatible", "supported_providers"]
