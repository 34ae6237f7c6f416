"""``ask`` command-line interface (package entrypoint).

This package wires argument parsing to action handlers kept in small, focused
modules. It performs no provider logic directly.

Startup sequence:
    1. Resolve the config path (``-c`` > ``ASK_CONFIG`` > ``~/.ask``).
    2. Create ``config.template.json`` beside it when missing.
    3. Load the config, persisting defaults if the file did not exist.
    4. Dispatch to the subcommand handler.

Every failure is printed as ``error: <message>`` on stderr with exit code 1;
argparse usage errors exit with code 2.

Public API re-exports:
- ``main``: CLI entrypoint callable
"""

from __future__ import annotations

import os
import sys
from typing import Optional

import httpx

from ...base.errors import ProviderError, classify_exception
from ...base.factory import UnknownProviderError
from ...base.logging import LOG_FILE_ENV, configure_logger, get_logger, log_event
from ...config import store
from ...config.defaults import APP_VERSION
from .cli_actions import AppContext, CliError, handle_ask, handle_models
from .cli_parser import HELP_TOPICS, build_parser, normalize_argv, subparser_for
from .cli_settings import handle_config, handle_key, handle_markdown, handle_provider

_logger = get_logger("ask.cli")

_TOPIC_ALIASES = {"model": "models", "providers": "provider", "keys": "key"}


def _print_help(parser, topic: str, config_path) -> None:
    topic = _TOPIC_ALIASES.get(topic, topic)
    if topic:
        target = subparser_for(parser, topic)
        if target is None:
            print(f"unknown help topic {topic!r}\n")
        else:
            print(target.format_help(), end="")
            return
    print(f"ask v{APP_VERSION}")
    print(parser.format_help())
    print(f"TOPICS\n  ask help {'|'.join(HELP_TOPICS)}\n")
    print("CONFIG")
    print(f"  File:      {config_path}")
    print(f"  Template:  {store.template_path_for(config_path)}")
    print("  ASK_CONFIG_DIR overrides the default config directory")


def _load_context(config_override: Optional[str], http_client: Optional[httpx.Client]) -> AppContext:
    path = store.resolve_path(config_override)
    store.ensure_template(store.template_path_for(path))
    cfg, found = store.load(path)
    if not found:
        store.save(path, cfg)
    return AppContext(config_path=path, config=cfg, http_client=http_client)


def _dispatch(parser, ctx: AppContext, args) -> int:
    cmd = _TOPIC_ALIASES.get(args.cmd, args.cmd)
    if cmd is None:
        _print_help(parser, "", ctx.config_path)
        return 0
    if cmd == "help":
        _print_help(parser, args.topic.strip().lower(), ctx.config_path)
        return 0
    if cmd == "version":
        print(APP_VERSION)
        return 0
    if cmd == "ask":
        return handle_ask(ctx, args)
    if cmd == "models":
        return handle_models(ctx, args)
    if cmd == "provider":
        return handle_provider(ctx, args)
    if cmd == "key":
        if args.key_cmd is None:
            _print_help(parser, "key", ctx.config_path)
            return 0
        return handle_key(ctx, args)
    if cmd == "config":
        return handle_config(ctx, args)
    return handle_markdown(ctx, args)


def main(argv: Optional[list[str]] = None, *, http_client: Optional[httpx.Client] = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.
    http_client: Optional[httpx.Client]
        Client handed to every provider adapter instead of the pooled one.

    Returns
    -------
    int
        Process exit code (0 success, non-zero on error).
    """
    log_file = os.environ.get(LOG_FILE_ENV, "").strip()
    if log_file:
        configure_logger(file_path=log_file)

    parser = build_parser()
    argv_list = normalize_argv(sys.argv[1:] if argv is None else argv)
    args, extras = parser.parse_known_args(argv_list)
    if extras:
        # question words interleaved with ask flags land here
        if args.cmd != "ask" or any(e.startswith("-") for e in extras):
            parser.error(f"unrecognized arguments: {' '.join(extras)}")
        args.question = list(args.question) + extras

    try:
        ctx = _load_context(args.config, http_client)
        if args.version:
            print(APP_VERSION)
            return 0
        return _dispatch(parser, ctx, args)
    except (CliError, ProviderError, UnknownProviderError, store.ConfigError) as exc:
        message = exc.message if isinstance(exc, ProviderError) else str(exc)
        log_event(_logger, "cli.error", error=message, code=classify_exception(exc).value)
        print(f"error: {message}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print(file=sys.stderr)
        return 130


__all__ = ["main"]


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
