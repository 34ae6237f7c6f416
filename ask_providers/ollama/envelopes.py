"""Response envelopes for the Ollama ``/api/tags`` and ``/api/chat`` endpoints."""
from __future__ import annotations

from typing import List

from pydantic import Field

from ..base.http import Envelope


class OllamaTag(Envelope):
    name: str = ""


class OllamaTagsEnvelope(Envelope):
    models: List[OllamaTag] = Field(default_factory=list)


class OllamaMessage(Envelope):
    content: str = ""


class OllamaChatEnvelope(Envelope):
    message: OllamaMessage = Field(default_factory=OllamaMessage)


__all__ = ["OllamaTag", "OllamaTagsEnvelope", "OllamaMessage", "OllamaChatEnvelope"]
