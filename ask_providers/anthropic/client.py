"""Anthropic provider adapter (Messages API over ``httpx``).

Endpoints:
    - ``GET  <base>/v1/models``   -> ``{data: [{id, display_name}]}``
    - ``POST <base>/v1/messages`` -> ``{content: [{type, text}]}``

Auth:
    ``x-api-key: <key>`` plus the fixed ``anthropic-version: 2023-06-01``
    header. Extra headers from ``ClientOptions`` are applied first so they
    cannot override either of these.

JSON mode:
    The Messages API has no JSON toggle; ``expect_json`` has no wire effect
    and there is no format fallback for this provider.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..base.cancellation import CancellationToken
from ..base.dto import ClientOptions
from ..base.errors import ErrorCode, ProviderError
from ..base.http import clean_headers, do_json, get_httpx_client
from ..base.models import AskRequest, AskResponse, Model, sort_models
from ..base.utils import join_url
from ..base.validation import validate_ask_request
from ..config.defaults import ANTHROPIC_API_VERSION, ANTHROPIC_DEFAULT_BASE_URL, ANTHROPIC_MAX_TOKENS
from .envelopes import AnthropicMessageEnvelope, AnthropicModelsEnvelope

_MISSING_KEY = "ANTHROPIC_API_KEY not configured"


class AnthropicClient:
    """Anthropic Messages API client."""

    def __init__(self, options: Optional[ClientOptions] = None) -> None:
        options = options or ClientOptions()
        self._api_key = options.api_key.strip()
        self._base_url = (options.base_url.strip() or ANTHROPIC_DEFAULT_BASE_URL).rstrip("/")
        self._headers = dict(options.headers)
        self._http = options.http_client or get_httpx_client(self._base_url, "anthropic", options.timeout)

    @property
    def name(self) -> str:
        return "anthropic"

    def list_models(
        self,
        *,
        timeout: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> List[Model]:
        """Return Anthropic models sorted by id; labels fall back to the id."""
        self._ensure_key(None)
        envelope = do_json(
            self._http,
            "GET",
            join_url(self._base_url, "/v1/models"),
            provider=self.name,
            headers=self._build_headers(),
            envelope=AnthropicModelsEnvelope,
            timeout=timeout,
            cancel_token=cancel_token,
        )
        models = []
        for entry in envelope.data:
            model_id = entry.id.strip()
            if not model_id:
                continue
            models.append(Model(id=model_id, display_name=entry.display_name.strip() or model_id))
        return sort_models(models)

    def ask(
        self,
        request: AskRequest,
        *,
        timeout: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> AskResponse:
        """Send one Messages API call and join the returned text blocks."""
        validate_ask_request(request, self.name)
        self._ensure_key(request.model)
        payload: Dict[str, Any] = {
            "model": request.model,
            "max_tokens": ANTHROPIC_MAX_TOKENS,
            "system": request.prompt,
            "messages": [
                {
                    "role": "user",
                    "content": [{"type": "text", "text": request.question}],
                }
            ],
        }
        envelope = do_json(
            self._http,
            "POST",
            join_url(self._base_url, "/v1/messages"),
            provider=self.name,
            model=request.model,
            headers=self._build_headers(),
            payload=payload,
            envelope=AnthropicMessageEnvelope,
            timeout=timeout,
            cancel_token=cancel_token,
        )
        parts = [block.text for block in envelope.content if block.type == "text" and block.text.strip()]
        if not parts:
            raise ProviderError(
                ErrorCode.CONTENT, "no text content returned by Anthropic", self.name, request.model
            )
        return AskResponse(text="\n".join(parts).strip())

    def _build_headers(self) -> Dict[str, str]:
        headers = clean_headers(self._headers)
        headers["x-api-key"] = self._api_key
        headers["anthropic-version"] = ANTHROPIC_API_VERSION
        return headers

    def _ensure_key(self, model: Optional[str]) -> None:
        if not self._api_key:
            raise ProviderError(ErrorCode.CONFIGURATION, _MISSING_KEY, self.name, model)


__all__ = ["AnthropicClient"]
