"""Anthropic adapter package."""

from .client import AnthropicClient

__all__ = ["AnthropicClient"]
