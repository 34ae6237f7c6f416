"""Response envelopes for OpenAI-style endpoints (``/models``, ``/chat/completions``)."""
from __future__ import annotations

from typing import Any, List

from pydantic import Field

from ..base.http import Envelope


class ModelEntry(Envelope):
    id: str = ""


class ModelsEnvelope(Envelope):
    data: List[ModelEntry] = Field(default_factory=list)


class ChatMessage(Envelope):
    # either a string or a list of {"type": ..., "text": ...} fragments
    content: Any = None


class ChatChoice(Envelope):
    message: ChatMessage = Field(default_factory=ChatMessage)


class ChatEnvelope(Envelope):
    choices: List[ChatChoice] = Field(default_factory=list)


__all__ = ["ModelEntry", "ModelsEnvelope", "ChatMessage", "ChatChoice", "ChatEnvelope"]
