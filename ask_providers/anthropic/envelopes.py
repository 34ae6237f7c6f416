"""Response envelopes for the Anthropic ``/v1/models`` and ``/v1/messages`` endpoints."""
from __future__ import annotations

from typing import List

from pydantic import Field

from ..base.http import Envelope


class AnthropicModelEntry(Envelope):
    id: str = ""
    display_name: str = ""


class AnthropicModelsEnvelope(Envelope):
    data: List[AnthropicModelEntry] = Field(default_factory=list)


class AnthropicContentBlock(Envelope):
    type: str = ""
    text: str = ""


class AnthropicMessageEnvelope(Envelope):
    content: List[AnthropicContentBlock] = Field(default_factory=list)


__all__ = [
    "AnthropicModelEntry",
    "AnthropicModelsEnvelope",
    "AnthropicContentBlock",
    "AnthropicMessageEnvelope",
]
