"""
Provider-agnostic domain models (DTOs) public surface.

Re-exports the one-class-per-file implementations under
``ask_providers.base.models_parts``.
"""

from .models_parts.model import Model, sort_models
from .models_parts.ask_request import AskRequest
from .models_parts.ask_response import AskResponse

__all__ = ["Model", "sort_models", "AskRequest", "AskResponse"]
