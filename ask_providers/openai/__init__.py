"""OpenAI adapter package."""

from .client import OpenAIClient

__all__ = ["OpenAIClient"]
