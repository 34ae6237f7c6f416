"""CLI action handlers for asking questions and managing models.

Purpose
-------
Turn parsed arguments into provider calls: build a client from the loaded
config, send the question, parse the ``{answer, command}`` reply and hand
any command to the runner. Provider, key, config and markdown commands live
in ``cli_settings``.

External Dependencies
---------------------
- Provider adapters over ``httpx``; an injected ``httpx.Client`` (tests,
  embedding) is threaded into every adapter through ``ClientOptions``.
- ``rich`` for markdown rendering and the spinner (``service.render``).

Fallback & Error Semantics
--------------------------
- User-facing failures raise :class:`CliError`; provider failures propagate
  as ``ProviderError``. The entrypoint maps both to ``error: <message>`` and
  exit code 1.
- A reply that is not strict JSON is salvaged with ``fallback_response`` and
  a warning is printed to stderr after the output.
"""

from __future__ import annotations

import argparse
import json
import os
import platform
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import httpx

from ...assistant import AssistantParseError, Response, build_prompt, fallback_response, parse, select_default_model
from ...base.cancellation import CancellationToken
from ...base.dto import ClientOptions, OpenAICompatibleSettings
from ...base.errors import ProviderError
from ...base.factory import create_client, create_openai_compatible
from ...base.interfaces import ProviderClient
from ...base.logging import get_logger, log_event
from ...base.models import AskRequest, Model
from ...config import store
from ...config.defaults import MODEL_SELECT_PAGE_LIMIT
from ..render import render_markdown, spinner, terminal_width
from ..runner import prompt_and_run
from .cli_utils import filter_models, format_table, read_line

_logger = get_logger("ask.cli")

FALLBACK_WARNING = "warning: provider response was not strict JSON; used fallback parser"


def _isatty(stream) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(callable(isatty) and isatty())


class CliError(Exception):
    """A user-facing CLI failure rendered as ``error: <message>``."""


@dataclass
class AppContext:
    """Loaded configuration plus the collaborators handlers need."""

    config_path: Path
    config: store.AppConfig
    http_client: Optional[httpx.Client] = None
    interactive: bool = field(default_factory=lambda: _isatty(sys.stdin) and _isatty(sys.stdout))

    def save(self) -> None:
        store.save(self.config_path, self.config)


# ---- shared helpers ----
def resolve_provider(ctx: AppContext, provider_input: Optional[str]) -> str:
    """Return the explicit provider or the configured default, validated."""
    provider = (provider_input or "").strip().lower() or ctx.config.current_provider
    if not provider:
        raise CliError("no default provider set; run `ask provider set <name>` or pass --provider")
    if not ctx.config.provider_exists(provider):
        raise CliError(f"provider '{provider}' is not configured")
    return provider


def new_client(ctx: AppContext, provider: str) -> ProviderClient:
    """Build a client for a built-in or custom provider from the config."""
    cfg = ctx.config
    api_key = cfg.resolve_api_key(provider)
    custom = cfg.custom_providers.get(provider)
    if custom is not None:
        settings = OpenAICompatibleSettings(
            name=provider,
            models_path=custom.models_path,
            chat_path=custom.chat_path,
            auth_header=custom.auth_header,
            auth_prefix=custom.auth_prefix,
        )
        options = ClientOptions(
            api_key=api_key, base_url=custom.base_url, headers=dict(custom.headers), http_client=ctx.http_client
        )
        return create_openai_compatible(settings, options)
    options = ClientOptions(api_key=api_key, base_url=cfg.resolve_base_url(provider), http_client=ctx.http_client)
    return create_client(provider, options)


def _list_models(ctx: AppContext, client: ProviderClient, label: str = "Loading models") -> List[Model]:
    with spinner(ctx.interactive, label):
        return client.list_models()


# ---- ask ----
def handle_ask(ctx: AppContext, args: argparse.Namespace) -> int:
    """Answer a question and optionally run the suggested command.

    Side effects
    ------------
    - Persists an auto-selected model when the provider had none.
    - Prints the rendered answer (or JSON with ``--json``) to stdout.
    - With a command and without ``--no-run``, prompts to execute it.
    """
    question = " ".join(args.question).strip()
    if not question:
        raise CliError("question is required")

    provider = resolve_provider(ctx, args.provider)
    model = args.model.strip() or ctx.config.get_model(provider)
    client = new_client(ctx, provider)

    if not model:
        try:
            models = _list_models(ctx, client)
        except ProviderError as exc:
            raise CliError(
                f"no model set for provider '{provider}' and unable to list models: {exc.message}"
            ) from exc
        if not models:
            raise CliError(f"no models available for provider '{provider}'")
        model = select_default_model(models)
        ctx.config.set_model(provider, model)
        ctx.save()
        log_event(_logger, "cli.model_autoselect", provider=provider, model=model)

    use_markdown = ctx.config.render_markdown and not args.no_markdown
    shell = os.environ.get("SHELL", "").strip() or "sh"
    prompt = build_prompt(shell, os.getcwd(), platform.system().lower(), use_markdown)

    token = CancellationToken(timeout=args.timeout)
    request = AskRequest(model=model, prompt=prompt, question=question, expect_json=True)
    with spinner(ctx.interactive and not args.json, "Thinking"):
        response = client.ask(request, timeout=args.timeout, cancel_token=token)

    parse_failed = False
    try:
        parsed = parse(response.text)
    except AssistantParseError:
        parsed = fallback_response(response.text)
        parse_failed = True

    exit_code = 0
    if args.json:
        out = {
            "provider": provider,
            "model": model,
            "question": question,
            "answer": parsed.answer,
            "command": parsed.command,
        }
        print(json.dumps(out, indent=2))
    else:
        exit_code = _present(parsed, use_markdown, args.no_run)

    if parse_failed:
        print(FALLBACK_WARNING, file=sys.stderr)
    return exit_code


def _present(parsed: Response, use_markdown: bool, no_run: bool) -> int:
    if parsed.answer:
        print(render_markdown(parsed.answer, terminal_width(sys.stdout), use_markdown))
    if not parsed.has_command():
        return 0
    if no_run:
        print()
        print(parsed.command)
        return 0
    return prompt_and_run(parsed.command)


# ---- models ----
def handle_models(ctx: AppContext, args: argparse.Namespace) -> int:
    sub = args.models_cmd or "list"
    provider_input = getattr(args, "provider", "")
    search = getattr(args, "search", "")
    terms = " ".join(getattr(args, "terms", None) or []).strip()
    if terms:
        search = terms
    if sub == "current":
        return _models_current(ctx, provider_input)
    if sub == "set":
        return _models_set(ctx, provider_input, " ".join(args.model))
    if sub == "select":
        return _models_select(ctx, provider_input, search)
    return _models_list(ctx, provider_input, search)


def _models_list(ctx: AppContext, provider_input: str, search: str) -> int:
    provider = resolve_provider(ctx, provider_input)
    models = filter_models(_list_models(ctx, new_client(ctx, provider)), search)
    if not models:
        if search:
            print(f"no models found for provider {provider} matching {json.dumps(search)}")
        else:
            print(f"no models found for provider {provider}")
        return 0

    current = ctx.config.get_model(provider)
    header = [["Provider:", provider], ["Models:", str(len(models))]]
    if search:
        header.append(["Search:", json.dumps(search)])
    rows = [["CURRENT", "MODEL", "DISPLAY"]]
    for m in models:
        rows.append(["*" if m.id == current else "", m.id, "" if m.display_name == m.id else m.display_name])
    print(format_table(header))
    print()
    print(format_table(rows))
    return 0


def _models_current(ctx: AppContext, provider_input: str) -> int:
    provider = resolve_provider(ctx, provider_input)
    model = ctx.config.get_model(provider) or "<not set>"
    print(f"provider={provider} model={model}")
    return 0


def _models_set(ctx: AppContext, provider_input: str, model: str) -> int:
    provider = resolve_provider(ctx, provider_input)
    model = model.strip()
    if not model:
        raise CliError("model cannot be empty")
    ctx.config.set_model(provider, model)
    ctx.save()
    print(f"set model for {provider} to {model}")
    return 0


def _models_select(ctx: AppContext, provider_input: str, search: str) -> int:
    """Interactive picker: number selects, ``/text`` searches, ``q`` cancels."""
    provider = resolve_provider(ctx, provider_input)
    models = _list_models(ctx, new_client(ctx, provider))
    if not models:
        raise CliError(f"no models available for {provider}")

    active = search.strip()
    while True:
        filtered = filter_models(models, active)
        if not filtered:
            print(f"no models match {json.dumps(active)}")
        else:
            print(f"provider={provider} models={len(filtered)}")
            shown = filtered[:MODEL_SELECT_PAGE_LIMIT]
            for i, m in enumerate(shown, start=1):
                print(f"{i:2d}. {m.id}")
            if len(filtered) > len(shown):
                print(f"... {len(filtered) - len(shown)} more models hidden")

        print("Type number to select, /text to search, empty to refresh, q to cancel")
        line = read_line("select> ")
        if line is None or line in ("q", "quit"):
            print("selection cancelled")
            return 0
        if line.startswith("/"):
            active = line[1:].strip()
            continue
        if not line:
            continue
        if not line.isdigit() or not 1 <= int(line) <= len(filtered):
            print("invalid selection")
            continue
        chosen = filtered[int(line) - 1].id
        ctx.config.set_model(provider, chosen)
        ctx.save()
        print(f"set model for {provider} to {chosen}")
        return 0


__all__ = [
    "CliError",
    "AppContext",
    "FALLBACK_WARNING",
    "resolve_provider",
    "new_client",
    "handle_ask",
    "handle_models",
]
