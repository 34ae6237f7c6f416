"""Ollama provider adapter for a local daemon.

No API key is involved; extra headers are forwarded on every call. JSON mode sets
``format: "json"``; Ollama accepts it for every model so there is no format
fallback.
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
from ..config.defaults import OLLAMA_DEFAULT_HOST
from .envelopes import OllamaChatEnvelope, OllamaTagsEnvelope


class OllamaClient:
    """Client for the Ollama ``/api/tags`` and ``/api/chat`` endpoints."""

    def __init__(self, options: Optional[ClientOptions] = None) -> None:
        options = options or ClientOptions()
        self._base_url = (options.base_url.strip() or OLLAMA_DEFAULT_HOST).rstrip("/")
        self._http = options.http_client or get_httpx_client(self._base_url, "ollama", options.timeout)
        self._headers = dict(options.headers)

    @property
    def name(self) -> str:
        return "ollama"

    def list_models(
        self,
        *,
        timeout: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> List[Model]:
        envelope = do_json(
            self._http,
            "GET",
            join_url(self._base_url, "/api/tags"),
            provider=self.name,
            headers=clean_headers(self._headers),
            envelope=OllamaTagsEnvelope,
            timeout=timeout,
            cancel_token=cancel_token,
        )
        models = []
        for tag in envelope.models:
            model_id = tag.name.strip()
            if model_id:
                models.append(Model(id=model_id, display_name=model_id))
        return sort_models(models)

    def ask(
        self,
        request: AskRequest,
        *,
        timeout: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> AskResponse:
        """Run one non-streaming chat turn and return the trimmed reply."""
        validate_ask_request(request, self.name)
        payload: Dict[str, Any] = {
            "model": request.model,
            "messages": [
                {"role": "system", "content": request.prompt},
                {"role": "user", "content": request.question},
            ],
            "stream": False,
        }
        if request.expect_json:
            payload["format"] = "json"
        envelope = do_json(
            self._http,
            "POST",
            join_url(self._base_url, "/api/chat"),
            provider=self.name,
            headers=clean_headers(self._headers),
            model=request.model,
            payload=payload,
            envelope=OllamaChatEnvelope,
            timeout=timeout,
            cancel_token=cancel_token,
        )
        text = envelope.message.content.strip()
        if not text:
            raise ProviderError(ErrorCode.CONTENT, "ollama response had empty content", self.name, request.model)
        return AskResponse(text=text)


__all__ = ["OllamaClient"]
