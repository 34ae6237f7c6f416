"""CLI parser construction for ``ask``.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions`` and ``cli_settings``.

A bare question is the default command: :func:`normalize_argv` inserts the
hidden ``ask`` subcommand when the first non-global token is not a known
command word, so ``ask "list open ports"`` and ``ask -c cfg.json models`` both
parse with one parser.
"""

from __future__ import annotations

import argparse
from typing import List, Sequence

from ...config.defaults import APP_NAME, ASK_DEFAULT_TIMEOUT_SECONDS
from .cli_utils import parse_header, parse_timeout

COMMAND_WORDS = frozenset(
    {
        "models",
        "model",
        "provider",
        "providers",
        "key",
        "keys",
        "config",
        "markdown",
        "help",
        "version",
    }
)
HELP_TOPICS = ("ask", "models", "provider", "key", "config", "markdown")


def normalize_argv(argv: Sequence[str]) -> List[str]:
    """Insert the ``ask`` subcommand in front of a bare question."""
    args = list(argv)
    i = 0
    while i < len(args):
        token = args[i]
        if token in ("-c", "--config"):
            i += 2
            continue
        if token.startswith("--config=") or token in ("-h", "--help", "-v", "--version"):
            i += 1
            continue
        break
    if i >= len(args) or args[i] in COMMAND_WORDS:
        return args
    if args[i] == "--":
        return args[:i] + ["ask"] + args[i + 1 :]
    return args[:i] + ["ask"] + args[i:]


def _add_provider_search(parser: argparse.ArgumentParser, search: bool = True) -> None:
    # SUPPRESS keeps nested parsers from overwriting values set on the parent
    parser.add_argument("-p", "--provider", default=argparse.SUPPRESS, help="provider to use")
    if search:
        parser.add_argument("-s", "--search", default=argparse.SUPPRESS, help="filter by id or label")


def _models_parser(sub: argparse._SubParsersAction) -> argparse.ArgumentParser:
    p = sub.add_parser("models", aliases=["model"], help="list/select/set provider models")
    _add_provider_search(p)
    msub = p.add_subparsers(dest="models_cmd")

    p_list = msub.add_parser("list", help="list models reported by the provider")
    _add_provider_search(p_list)
    p_list.add_argument("terms", nargs="*", help="search text")

    p_current = msub.add_parser("current", help="show the configured model")
    _add_provider_search(p_current, search=False)

    p_set = msub.add_parser("set", help="set the default model")
    _add_provider_search(p_set, search=False)
    p_set.add_argument("model", nargs="+")

    p_select = msub.add_parser("select", help="pick a model interactively")
    _add_provider_search(p_select)
    p_select.add_argument("terms", nargs="*", help="initial search text")
    return p


def _provider_parser(sub: argparse._SubParsersAction) -> argparse.ArgumentParser:
    p = sub.add_parser("provider", aliases=["providers"], help="list/show/set/add/remove providers")
    psub = p.add_subparsers(dest="provider_cmd")
    psub.add_parser("list", help="list built-in and custom providers")
    psub.add_parser("current", help="print the current provider")

    p_set = psub.add_parser("set", help="set the current provider")
    p_set.add_argument("name")

    p_show = psub.add_parser("show", aliases=["inspect"], help="show provider settings as JSON")
    p_show.add_argument("name", nargs="?", default=None)

    p_add = psub.add_parser("add", help="add an OpenAI-compatible provider")
    p_add.add_argument("name")
    p_add.add_argument("--base-url", required=True)
    p_add.add_argument("--model", default="", help="default model for this provider")
    p_add.add_argument("--api-key", default="", help="store API key in config")
    p_add.add_argument("--api-key-env", default="", help="env var name for API key")
    p_add.add_argument("--models-path", default="", help="default: /models")
    p_add.add_argument("--chat-path", default="", help="default: /chat/completions")
    p_add.add_argument("--auth-header", default="", help="default: Authorization")
    p_add.add_argument("--auth-prefix", default="", help="default: 'Bearer '")
    p_add.add_argument(
        "--header",
        dest="headers",
        action="append",
        type=parse_header,
        default=[],
        help="additional static header key=value (repeatable)",
    )

    p_remove = psub.add_parser("remove", aliases=["rm", "delete"], help="remove a custom provider")
    p_remove.add_argument("name")
    return p


def _key_parser(sub: argparse._SubParsersAction) -> argparse.ArgumentParser:
    p = sub.add_parser("key", aliases=["keys"], help="set/show/clear API keys")
    ksub = p.add_subparsers(dest="key_cmd")
    p_set = ksub.add_parser("set", help="store a key or key env var")
    p_set.add_argument("provider")
    p_set.add_argument("--value", default="", help="API key value (prompted when omitted)")
    p_set.add_argument("--env", default="", help="env var holding the key")
    p_show = ksub.add_parser("show", help="show the masked effective key")
    p_show.add_argument("provider")
    p_clear = ksub.add_parser("clear", help="remove the stored key and env var")
    p_clear.add_argument("provider")
    return p


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level ``ask`` parser and subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Parser with global ``-c/--config`` and ``-v/--version`` flags and the
        ``ask``, ``models``, ``provider``, ``key``, ``config``, ``markdown``,
        ``help`` and ``version`` subcommands. No I/O happens here.
    """
    p = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Terminal LLM assistant with provider switching, model discovery, and command prefill.",
    )
    p.add_argument("-c", "--config", default=None, help="config file path (or ASK_CONFIG)")
    p.add_argument("-v", "--version", action="store_true", help="show version")
    sub = p.add_subparsers(dest="cmd")

    # ask (default when the first word is not a command)
    p_ask = sub.add_parser("ask", help="ask a question (default)")
    p_ask.add_argument("question", nargs="*")
    p_ask.add_argument("-p", "--provider", default="", help="provider to use")
    p_ask.add_argument("-m", "--model", default="", help="model to use")
    p_ask.add_argument(
        "--timeout",
        type=parse_timeout,
        default=ASK_DEFAULT_TIMEOUT_SECONDS,
        help="request timeout as seconds or a duration like 30s, 2m (default: 90s)",
    )
    p_ask.add_argument("--no-markdown", action="store_true", help="disable markdown rendering for this call")
    p_ask.add_argument("--no-run", action="store_true", help="print returned command without run prompt")
    p_ask.add_argument("--json", action="store_true", help="print structured JSON")

    _models_parser(sub)
    _provider_parser(sub)
    _key_parser(sub)

    p_config = sub.add_parser("config", help="show config and paths")
    p_config.add_argument("config_cmd", nargs="?", choices=["show", "path", "template"], default="show")

    p_markdown = sub.add_parser("markdown", help="toggle markdown rendering")
    p_markdown.add_argument(
        "state", nargs="?", choices=["on", "enable", "off", "disable", "status"], default="status"
    )

    p_help = sub.add_parser("help", help="show topic help")
    p_help.add_argument("topic", nargs="?", default="")

    sub.add_parser("version", help="show version")
    return p


def subparser_for(parser: argparse.ArgumentParser, topic: str) -> argparse.ArgumentParser | None:
    """Return the subcommand parser registered under ``topic`` (aliases included)."""
    for action in parser._actions:
        if isinstance(action, argparse._SubParsersAction):
            return action.choices.get(topic)
    return None


__all__ = ["COMMAND_WORDS", "HELP_TOPICS", "normalize_argv", "build_parser", "subparser_for"]
