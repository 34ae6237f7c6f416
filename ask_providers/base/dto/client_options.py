"""Typed option objects for provider client construction.

Purpose
-------
Capture the shared construction parameters every adapter accepts
(``ClientOptions``) and the knobs that parameterize the generic
OpenAI-compatible adapter (``OpenAICompatibleSettings``). Both are pure
configuration with no identity beyond their fields.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and ``model_copy`` convenience.
- ``httpx`` for the optional injected transport client.

Notes
-----
- Key resolution (env var vs stored value) happens in the config store; the
  adapters receive a plain string here.
- ``http_client`` lets tests inject a client backed by ``httpx.MockTransport``.
"""
from __future__ import annotations

from typing import Dict, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field

from ..constants import DEFAULT_HTTP_TIMEOUT


class ClientOptions(BaseModel):
    """Common provider client construction parameters.

    Attributes
    ----------
    api_key:
        Resolved API key; blank means "not configured".
    base_url:
        Optional override for the API base URL. Adapters apply their own
        default when blank.
    http_client:
        Optional ``httpx.Client``; when omitted a pooled client with
        ``timeout`` is used.
    headers:
        Static extra headers. Entries with a blank key or value are skipped.
    timeout:
        Default request timeout in seconds for the pooled client.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    api_key: str = ""
    base_url: str = ""
    http_client: Optional[httpx.Client] = None
    headers: Dict[str, str] = Field(default_factory=dict)
    timeout: float = DEFAULT_HTTP_TIMEOUT


class OpenAICompatibleSettings(BaseModel):
    """Tagged configuration for the generic OpenAI-compatible adapter.

    Blank paths and auth header fall back to the OpenAI defaults at client
    construction; an empty ``auth_prefix`` falls back to ``"Bearer "`` while a
    whitespace-only prefix is kept verbatim.
    """

    name: str
    models_path: str = "/models"
    chat_path: str = "/chat/completions"
    auth_header: str = "Authorization"
    auth_prefix: str = "Bearer "
    require_api_key: bool = False


__all__ = ["ClientOptions", "OpenAICompatibleSettings"]
