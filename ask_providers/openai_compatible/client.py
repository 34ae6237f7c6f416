"""Generic OpenAI-compatible provider adapter (raw HTTP over ``httpx``).

Summary:
- ``list_models``: ``GET <base><models_path>`` -> ``{data: [{id}]}``.
- ``ask``: ``POST <base><chat_path>`` with a chat-completions payload
  (system + user messages, ``temperature`` 0.2, optional
  ``response_format: {type: json_object}``).

Parameterization:
    One ``OpenAICompatibleSettings`` instance describes a vendor: paths, the
    auth header name and value prefix, and whether a key is mandatory. The
    ``openai`` and ``openrouter`` adapters are thin subclasses that only fill
    in a default base URL and require a key; user-defined proxies use this
    class directly with ``require_api_key=False``.

Format fallback:
    When ``expect_json`` is set and the first attempt fails with an error
    naming ``response_format`` (see ``format_likely_unsupported``), the
    request is retried exactly once without the directive. Any other failure
    propagates unchanged.

Errors:
    - ``VALIDATION`` for blank model/question, before any I/O.
    - ``CONFIGURATION`` when a required key is missing.
    - ``TRANSPORT`` / ``DECODE`` from ``do_json``.
    - ``CONTENT`` when no choice or no text comes back.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..base.cancellation import CancellationToken
from ..base.constants import DEFAULT_TEMPERATURE
from ..base.content import extract_message_content
from ..base.dto import ClientOptions, OpenAICompatibleSettings
from ..base.errors import ErrorCode, ProviderError
from ..base.http import clean_headers, do_json, get_httpx_client
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import AskRequest, AskResponse, Model, sort_models
from ..base.utils import ensure_leading_slash, join_url, normalize_name
from ..base.validation import format_likely_unsupported, validate_ask_request
from ..config.defaults import (
    OPENAI_COMPAT_AUTH_HEADER,
    OPENAI_COMPAT_AUTH_PREFIX,
    OPENAI_COMPAT_CHAT_PATH,
    OPENAI_COMPAT_MODELS_PATH,
)
from .envelopes import ChatEnvelope, ModelsEnvelope


class OpenAICompatibleClient:
    """Client for any endpoint speaking the OpenAI chat-completions dialect.

    Parameters:
        settings: Vendor parameterization (name, paths, auth scheme).
        options: Key, base URL, extra headers and optional ``httpx.Client``.

    The instance is immutable after construction and safe to share across
    threads.
    """

    def __init__(self, settings: OpenAICompatibleSettings, options: Optional[ClientOptions] = None) -> None:
        options = options or ClientOptions()
        self._name = normalize_name(settings.name)
        self._api_key = options.api_key.strip()
        self._base_url = options.base_url.strip().rstrip("/")
        self._models_path = ensure_leading_slash(settings.models_path.strip() or OPENAI_COMPAT_MODELS_PATH)
        self._chat_path = ensure_leading_slash(settings.chat_path.strip() or OPENAI_COMPAT_CHAT_PATH)
        self._auth_header = settings.auth_header.strip() or OPENAI_COMPAT_AUTH_HEADER
        # only an empty prefix is defaulted; whitespace-only prefixes are intentional
        self._auth_prefix = settings.auth_prefix if settings.auth_prefix != "" else OPENAI_COMPAT_AUTH_PREFIX
        self._require_api_key = settings.require_api_key
        self._headers = dict(options.headers)
        self._http = options.http_client or get_httpx_client(
            self._base_url or None, f"openai_compatible:{self._name}", options.timeout
        )
        self._logger = get_logger(f"ask.providers.{self._name or 'openai_compatible'}")

    @property
    def name(self) -> str:
        """Return the canonical provider slug this client was configured with."""
        return self._name

    # ---- contract ----
    def list_models(
        self,
        *,
        timeout: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> List[Model]:
        """Fetch the model catalog and return it sorted by id.

        Entries with a blank id are dropped; ``display_name`` equals the id
        because this dialect does not carry a label.
        """
        self._ensure_key(None)
        envelope = do_json(
            self._http,
            "GET",
            join_url(self._base_url, self._models_path),
            provider=self._name,
            headers=self._build_headers(),
            envelope=ModelsEnvelope,
            timeout=timeout,
            cancel_token=cancel_token,
        )
        models = []
        for entry in envelope.data:
            model_id = entry.id.strip()
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
        """Send one chat completion and return the first choice's text.

        Failure modes:
            - Validation and missing-key errors are raised before any I/O.
            - A rejected ``response_format`` triggers one retry without it.
            - Zero choices or empty content raise ``CONTENT`` errors.
        """
        validate_ask_request(request, self._name)
        self._ensure_key(request.model)
        url = join_url(self._base_url, self._chat_path)
        try:
            envelope = self._post_chat(url, request, True, timeout, cancel_token)
        except ProviderError as exc:
            if not (request.expect_json and format_likely_unsupported(exc)):
                raise
            log_event(
                self._logger,
                "ask.fallback",
                LogContext(provider=self._name, model=request.model),
                dropped="response_format",
                status=exc.status_code,
            )
            envelope = self._post_chat(url, request, False, timeout, cancel_token)

        if not envelope.choices:
            raise ProviderError(ErrorCode.CONTENT, f"no choices returned by {self._name}", self._name, request.model)
        try:
            text = extract_message_content(envelope.choices[0].message.content)
        except ValueError as exc:
            raise ProviderError(
                ErrorCode.CONTENT,
                f"decode {self._name} response content: {exc}",
                self._name,
                request.model,
                raw=exc,
            ) from exc
        if not text:
            raise ProviderError(
                ErrorCode.CONTENT,
                f"decode {self._name} response content: content was empty",
                self._name,
                request.model,
            )
        return AskResponse(text=text)

    # ---- helpers ----
    def _post_chat(
        self,
        url: str,
        request: AskRequest,
        include_response_format: bool,
        timeout: Optional[float],
        cancel_token: Optional[CancellationToken],
    ) -> ChatEnvelope:
        return do_json(
            self._http,
            "POST",
            url,
            provider=self._name,
            model=request.model,
            headers=self._build_headers(),
            payload=self._build_payload(request, include_response_format),
            envelope=ChatEnvelope,
            timeout=timeout,
            cancel_token=cancel_token,
        )

    @staticmethod
    def _build_payload(request: AskRequest, include_response_format: bool) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": request.model,
            "messages": [
                {"role": "system", "content": request.prompt},
                {"role": "user", "content": request.question},
            ],
            "temperature": DEFAULT_TEMPERATURE,
        }
        if request.expect_json and include_response_format:
            payload["response_format"] = {"type": "json_object"}
        return payload

    def _build_headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        if self._api_key:
            headers[self._auth_header] = f"{self._auth_prefix}{self._api_key}"
        headers.update(clean_headers(self._headers))
        return headers

    def _ensure_key(self, model: Optional[str]) -> None:
        if self._require_api_key and not self._api_key:
            raise ProviderError(
                ErrorCode.CONFIGURATION, f"API key not configured for {self._name}", self._name, model
            )


__all__ = ["OpenAICompatibleClient"]
