"""ProviderClient Protocol (single-class module).

Defines the uniform contract every provider adapter implements.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable

from ..cancellation import CancellationToken
from ..models import AskRequest, AskResponse, Model


@runtime_checkable
class ProviderClient(Protocol):
    """Uniform client contract over one provider's HTTP API.

    Implementations validate requests before any I/O, raise
    :class:`~ask_providers.base.errors.ProviderError` on failure, and hold no
    mutable state after construction.
    """

    @property
    def name(self) -> str:
        """Canonical lowercase provider identifier, e.g. ``"openai"``."""
        ...

    def list_models(
        self,
        *,
        timeout: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> List[Model]:
        """Return models usable for text generation, sorted ascending by id."""
        ...

    def ask(
        self,
        request: AskRequest,
        *,
        timeout: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> AskResponse:
        """Send one system prompt + question pair and return normalized text."""
        ...
