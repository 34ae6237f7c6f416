"""OpenAI provider adapter.

A specialization of :class:`OpenAICompatibleClient` bound to
``https://api.openai.com/v1`` with a mandatory ``Authorization: Bearer`` key.
"""

from __future__ import annotations

from typing import Optional

from ..base.dto import ClientOptions, OpenAICompatibleSettings
from ..config.defaults import OPENAI_DEFAULT_BASE_URL
from ..openai_compatible import OpenAICompatibleClient


class OpenAIClient(OpenAICompatibleClient):
    """OpenAI chat-completions client."""

    PROVIDER_NAME = "openai"
    DEFAULT_BASE_URL = OPENAI_DEFAULT_BASE_URL

    def __init__(self, options: Optional[ClientOptions] = None) -> None:
        options = options or ClientOptions()
        if not options.base_url.strip():
            options = options.model_copy(update={"base_url": self.DEFAULT_BASE_URL})
        super().__init__(
            OpenAICompatibleSettings(name=self.PROVIDER_NAME, require_api_key=True),
            options,
        )


__all__ = ["OpenAIClient"]
