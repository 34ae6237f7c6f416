"""Gemini adapter package."""

from .client import GeminiClient

__all__ = ["GeminiClient"]
