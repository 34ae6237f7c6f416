"""DTO package for provider construction options."""

from .client_options import ClientOptions, OpenAICompatibleSettings

__all__ = ["ClientOptions", "OpenAICompatibleSettings"]
