"""Response envelopes for the Gemini ``models`` and ``generateContent`` endpoints."""
from __future__ import annotations

from typing import List

from pydantic import Field

from ..base.http import Envelope


class GeminiModelEntry(Envelope):
    name: str = ""
    display_name: str = Field(default="", alias="displayName")
    supported_generation_methods: List[str] = Field(default_factory=list, alias="supportedGenerationMethods")


class GeminiModelsEnvelope(Envelope):
    models: List[GeminiModelEntry] = Field(default_factory=list)


class GeminiPart(Envelope):
    text: str = ""


class GeminiContent(Envelope):
    parts: List[GeminiPart] = Field(default_factory=list)


class GeminiCandidate(Envelope):
    content: GeminiContent = Field(default_factory=GeminiContent)


class GeminiGenerateEnvelope(Envelope):
    candidates: List[GeminiCandidate] = Field(default_factory=list)


__all__ = [
    "GeminiModelEntry",
    "GeminiModelsEnvelope",
    "GeminiPart",
    "GeminiContent",
    "GeminiCandidate",
    "GeminiGenerateEnvelope",
]
