"""
Providers Base Package

Exports the provider contract, request/response value types, error taxonomy,
cancellation primitives and the provider registry used by every adapter and
by the CLI layer.
"""

from .cancellation import CancellationToken
from .dto import ClientOptions, OpenAICompatibleSettings
from .errors import ErrorCode, ProviderError, classify_exception
from .factory import UnknownProviderError, create_client, create_openai_compatible, supported_providers
from .interfaces import ProviderClient
from .models import AskRequest, AskResponse, Model, sort_models

__all__ = [
    # Models
    "Model",
    "AskRequest",
    "AskResponse",
    "sort_models",
    # Options
    "ClientOptions",
    "OpenAICompatibleSettings",
    # Interfaces
    "ProviderClient",
    # Errors
    "ErrorCode",
    "ProviderError",
    "classify_exception",
    "UnknownProviderError",
    # Registry
    "create_client",
    "create_openai_compatible",
    "supported_providers",
    # Cancellation
    "CancellationToken",
]
