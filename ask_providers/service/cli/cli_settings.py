"""CLI handlers for provider, key, config and markdown settings.

Each handler reads or mutates the loaded :class:`~ask_providers.config.store.AppConfig`
and persists changes immediately. None of them perform network I/O.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from ...config import store
from ...config.env import get_env_var_name
from .cli_actions import AppContext, CliError
from .cli_utils import format_table, mask_key, read_secret


def _require_provider(ctx: AppContext, name: str) -> str:
    name = (name or "").strip().lower()
    if not name:
        raise CliError("provider name is required")
    if not ctx.config.provider_exists(name):
        raise CliError(f"provider '{name}' is not configured")
    return name


# ---- provider ----
def handle_provider(ctx: AppContext, args: argparse.Namespace) -> int:
    sub = args.provider_cmd or "list"
    cfg = ctx.config
    if sub == "list":
        return _provider_list(ctx)
    if sub == "current":
        print(cfg.current_provider)
        return 0
    if sub == "set":
        name = _require_provider(ctx, args.name)
        cfg.set_current_provider(name)
        ctx.save()
        print(f"current provider set to {name}")
        return 0
    if sub in ("show", "inspect"):
        return _provider_show(ctx, args.name or cfg.current_provider)
    if sub == "add":
        return _provider_add(ctx, args)
    if sub in ("remove", "rm", "delete"):
        name = (args.name or "").strip().lower()
        try:
            cfg.remove_custom_provider(name)
        except store.ConfigError as exc:
            raise CliError(str(exc)) from exc
        ctx.save()
        print(f"removed provider {name}")
        return 0
    raise CliError(f"unknown provider subcommand '{sub}'")


def _provider_list(ctx: AppContext) -> int:
    cfg = ctx.config
    rows = [["CURRENT", "NAME", "TYPE", "MODEL", "BASE_URL"]]
    for name in cfg.provider_names():
        rows.append(
            [
                "*" if name == cfg.current_provider else "",
                name,
                "custom-openai-compatible" if name in cfg.custom_providers else "builtin",
                cfg.get_model(name),
                cfg.resolve_base_url(name),
            ]
        )
    print(format_table(rows))
    return 0


def _provider_show(ctx: AppContext, name: str) -> int:
    """Print provider settings as JSON; the key itself is never shown."""
    name = _require_provider(ctx, name)
    cfg = ctx.config
    custom = name in cfg.custom_providers
    api_key_env = cfg.api_key_env(name)
    if not api_key_env and not custom:
        api_key_env = get_env_var_name(name) or ""
    view = {
        "name": name,
        "current": cfg.current_provider == name,
        "model": cfg.get_model(name),
        "base_url": cfg.resolve_base_url(name),
        "api_key_env": api_key_env,
        "has_api_key": bool(cfg.stored_api_key(name)),
        "custom": custom,
    }
    for key in ("model", "base_url", "api_key_env"):
        if not view[key]:
            del view[key]
    print(json.dumps(view, indent=2))
    return 0


def _provider_add(ctx: AppContext, args: argparse.Namespace) -> int:
    name = (args.name or "").strip().lower()
    provider = store.CustomProviderConfig(
        base_url=args.base_url.strip(),
        model=args.model.strip(),
        api_key=args.api_key.strip(),
        api_key_env=args.api_key_env.strip(),
        models_path=args.models_path.strip(),
        chat_path=args.chat_path.strip(),
        auth_header=args.auth_header.strip(),
        auth_prefix=args.auth_prefix,
        headers=dict(args.headers),
    )
    try:
        ctx.config.add_custom_provider(name, provider)
    except store.ConfigError as exc:
        raise CliError(str(exc)) from exc
    ctx.save()
    print(f"added provider {name}")
    return 0


# ---- key ----
def handle_key(ctx: AppContext, args: argparse.Namespace) -> int:
    sub = args.key_cmd
    provider = _require_provider(ctx, args.provider)
    cfg = ctx.config
    if sub == "set":
        value = args.value.strip()
        env_var = args.env.strip()
        if not value and not env_var:
            value = read_secret("API key: ")
        if env_var:
            cfg.set_api_key_env(provider, env_var)
        if value:
            cfg.set_api_key(provider, value)
        ctx.save()
        suffix = f" (env={env_var})" if env_var else ""
        print(f"updated credentials for {provider}{suffix}")
        return 0
    if sub == "clear":
        cfg.set_api_key(provider, "")
        cfg.set_api_key_env(provider, "")
        ctx.save()
        print(f"cleared credentials for {provider}")
        return 0
    if sub == "show":
        env_var = cfg.api_key_env(provider)
        if not env_var and provider not in cfg.custom_providers:
            env_var = get_env_var_name(provider) or ""
        print(f"provider={provider}")
        print(f"api_key={mask_key(cfg.resolve_api_key(provider))}")
        print(f"storage={'plain' if cfg.stored_api_key(provider) else 'none'}")
        if env_var:
            print(f"api_key_env={env_var}")
        return 0
    raise CliError(f"unknown key subcommand '{sub}'")


# ---- config / markdown ----
def handle_config(ctx: AppContext, args: argparse.Namespace) -> int:
    if args.config_cmd == "path":
        print(ctx.config_path)
        return 0
    if args.config_cmd == "template":
        print(store.template_path_for(ctx.config_path))
        return 0
    try:
        text = Path(ctx.config_path).read_text(encoding="utf-8")
    except OSError as exc:
        raise CliError(f"read config: {exc}") from exc
    print(text, end="" if text.endswith("\n") else "\n")
    return 0


def handle_markdown(ctx: AppContext, args: argparse.Namespace) -> int:
    state = args.state
    if state in ("on", "enable", "off", "disable"):
        enabled = state in ("on", "enable")
        ctx.config.render_markdown = enabled
        ctx.save()
        print(f"markdown rendering {'enabled' if enabled else 'disabled'}")
        return 0
    print(f"markdown={'on' if ctx.config.render_markdown else 'off'}")
    return 0


__all__ = ["handle_provider", "handle_key", "handle_config", "handle_markdown"]
