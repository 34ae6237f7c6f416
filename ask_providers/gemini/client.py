"""Gemini provider adapter (Generative Language API over ``httpx``).

Endpoints:
    - ``GET  <base>/models`` -> ``{models: [{name, displayName, supportedGenerationMethods}]}``
    - ``POST <base>/models/<model>:generateContent``

Listing keeps only models that support ``generateContent`` and strips the
``models/`` resource prefix from their names. ``ask`` accepts ids with or
without that prefix.

JSON mode sets ``generationConfig.responseMimeType``; a rejection naming
that field triggers one retry with only the temperature left in
``generationConfig``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..base.cancellation import CancellationToken
from ..base.constants import DEFAULT_TEMPERATURE
from ..base.dto import ClientOptions
from ..base.errors import ErrorCode, ProviderError
from ..base.http import clean_headers, do_json, get_httpx_client
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import AskRequest, AskResponse, Model, sort_models
from ..base.utils import join_url, strip_prefix_once
from ..base.validation import format_likely_unsupported, validate_ask_request
from ..config.defaults import GEMINI_DEFAULT_BASE_URL
from .envelopes import GeminiGenerateEnvelope, GeminiModelsEnvelope

_MISSING_KEY = "GEMINI_API_KEY not configured"
_MODEL_PREFIX = "models/"


def _supports_generate_content(methods: List[str]) -> bool:
    return any(m.strip().lower() == "generatecontent" for m in methods)


class GeminiClient:
    """Google Gemini client."""

    def __init__(self, options: Optional[ClientOptions] = None) -> None:
        options = options or ClientOptions()
        self._api_key = options.api_key.strip()
        self._base_url = (options.base_url.strip() or GEMINI_DEFAULT_BASE_URL).rstrip("/")
        self._headers = dict(options.headers)
        self._http = options.http_client or get_httpx_client(self._base_url, "gemini", options.timeout)
        self._logger = get_logger("ask.providers.gemini")

    @property
    def name(self) -> str:
        return "gemini"

    def list_models(
        self,
        *,
        timeout: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> List[Model]:
        self._ensure_key(None)
        envelope = do_json(
            self._http,
            "GET",
            join_url(self._base_url, "/models"),
            provider=self.name,
            headers=self._build_headers(),
            envelope=GeminiModelsEnvelope,
            timeout=timeout,
            cancel_token=cancel_token,
        )
        models = []
        for entry in envelope.models:
            if not _supports_generate_content(entry.supported_generation_methods):
                continue
            model_id = strip_prefix_once(entry.name.strip(), _MODEL_PREFIX)
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
        """Call ``generateContent`` and join the first candidate's text parts.

        Raises ``VALIDATION`` when the id is only the ``models/`` prefix, and
        ``CONTENT`` when there is no candidate or no non-blank part.
        """
        validate_ask_request(request, self.name)
        self._ensure_key(request.model)
        model = strip_prefix_once(request.model.strip(), _MODEL_PREFIX)
        if not model:
            raise ProviderError(ErrorCode.VALIDATION, "model is required", self.name, request.model)

        url = join_url(self._base_url, f"/models/{model}:generateContent")
        payload = self._build_payload(request, include_mime_type=True)
        try:
            envelope = self._post(url, payload, model, timeout, cancel_token)
        except ProviderError as exc:
            if not (request.expect_json and format_likely_unsupported(exc)):
                raise
            log_event(
                self._logger,
                "ask.fallback",
                LogContext(provider=self.name, model=model),
                dropped="responseMimeType",
                status=exc.status_code,
            )
            payload = self._build_payload(request, include_mime_type=False)
            envelope = self._post(url, payload, model, timeout, cancel_token)

        if not envelope.candidates:
            raise ProviderError(ErrorCode.CONTENT, "no candidates returned by Gemini", self.name, model)
        parts = [p.text for p in envelope.candidates[0].content.parts if p.text.strip()]
        if not parts:
            raise ProviderError(ErrorCode.CONTENT, "Gemini response had no text parts", self.name, model)
        return AskResponse(text="\n".join(parts).strip())

    def _post(
        self,
        url: str,
        payload: Dict[str, Any],
        model: str,
        timeout: Optional[float],
        cancel_token: Optional[CancellationToken],
    ) -> GeminiGenerateEnvelope:
        return do_json(
            self._http,
            "POST",
            url,
            provider=self.name,
            model=model,
            headers=self._build_headers(),
            payload=payload,
            envelope=GeminiGenerateEnvelope,
            timeout=timeout,
            cancel_token=cancel_token,
        )

    @staticmethod
    def _build_payload(request: AskRequest, include_mime_type: bool) -> Dict[str, Any]:
        generation_config: Dict[str, Any] = {"temperature": DEFAULT_TEMPERATURE}
        if request.expect_json and include_mime_type:
            generation_config["responseMimeType"] = "application/json"
        return {
            "systemInstruction": {"parts": [{"text": request.prompt}]},
            "contents": [{"role": "user", "parts": [{"text": request.question}]}],
            "generationConfig": generation_config,
        }

    def _build_headers(self) -> Dict[str, str]:
        headers = {"x-goog-api-key": self._api_key}
        headers.update(clean_headers(self._headers))
        return headers

    def _ensure_key(self, model: Optional[str]) -> None:
        if not self._api_key:
            raise ProviderError(ErrorCode.CONFIGURATION, _MISSING_KEY, self.name, model)


__all__ = ["GeminiClient"]
