"""OpenRouter adapter package."""

from .client import OpenRouterClient

__all__ = ["OpenRouterClient"]
