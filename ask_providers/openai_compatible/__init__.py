"""Generic OpenAI-compatible adapter package."""

from .client import OpenAICompatibleClient

__all__ = ["OpenAICompatibleClient"]
