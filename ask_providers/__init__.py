"""ask_providers package

Terminal assistant that turns a natural-language question into a shell
command (or a short answer) by asking one of several LLM providers.

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode`,
      :class:`UnknownProviderError`
    - Registry: :func:`create_client`, :func:`create_openai_compatible`,
      :func:`supported_providers`
    - Contract and value types: ``ProviderClient``, ``Model``,
      ``AskRequest``, ``AskResponse``, ``ClientOptions``,
      ``OpenAICompatibleSettings``

The command-line entry point lives in :mod:`ask_providers.service.cli`.
"""

from .base import (
    AskRequest,
    AskResponse,
    CancellationToken,
    ClientOptions,
    ErrorCode,
    Model,
    OpenAICompatibleSettings,
    ProviderClient,
    ProviderError,
    UnknownProviderError,
    create_client,
    create_openai_compatible,
    supported_providers,
)
from .config.defaults import APP_VERSION

__version__ = APP_VERSION

__all__ = [
    "__version__",
    "ProviderError",
    "ErrorCode",
    "UnknownProviderError",
    "create_client",
    "create_openai_compatible",
    "supported_providers",
    "ProviderClient",
    "Model",
    "AskRequest",
    "AskResponse",
    "ClientOptions",
    "OpenAICompatibleSettings",
    "CancellationToken",
]
