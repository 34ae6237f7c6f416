"""OpenRouter provider adapter.

OpenRouter speaks the OpenAI dialect; this adapter only changes the default
base URL (``https://openrouter.ai/api/v1``) and the provider name.
"""

from __future__ import annotations

from ..config.defaults import OPENROUTER_DEFAULT_BASE_URL
from ..openai.client import OpenAIClient


class OpenRouterClient(OpenAIClient):
    """OpenRouter chat-completions client (key required)."""

    PROVIDER_NAME = "openrouter"
    DEFAULT_BASE_URL = OPENROUTER_DEFAULT_BASE_URL


__all__ = ["OpenRouterClient"]
