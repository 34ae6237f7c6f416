"""Domain model parts (one class per file)."""

from .model import Model, sort_models
from .ask_request import AskRequest
from .ask_response import AskResponse

__all__ = ["Model", "sort_models", "AskRequest", "AskResponse"]
