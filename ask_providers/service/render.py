"""Terminal presentation helpers built on ``rich``.

``render_markdown`` turns an assistant answer into styled terminal text and
``spinner`` shows a status indicator on stderr while a provider call runs.
Both degrade to plain output: rendering falls back to the trimmed text and
the spinner is a no-op unless stderr is a terminal.
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import Iterator, Optional, TextIO

from rich.console import Console
from rich.errors import ConsoleError, StyleError
from rich.markdown import Markdown

from ..base.logging import get_logger
from ..config.defaults import RENDER_DEFAULT_WIDTH

_logger = get_logger("ask.render")


def render_markdown(text: str, width: int = RENDER_DEFAULT_WIDTH, enabled: bool = True) -> str:
    """Return ``text`` rendered as terminal Markdown, or trimmed when disabled.

    A non-positive ``width`` uses the default of 100 columns. Rendering errors
    fall back to the trimmed input.
    """
    clean = (text or "").strip()
    if not clean or not enabled:
        return clean
    if width <= 0:
        width = RENDER_DEFAULT_WIDTH
    console = Console(width=width, force_terminal=True, highlight=False)
    try:
        with console.capture() as capture:
            console.print(Markdown(clean))
    except (ConsoleError, StyleError, ValueError) as exc:
        _logger.debug("markdown render failed: %s", exc)
        return clean
    return capture.get().rstrip()


def terminal_width(stream: Optional[TextIO] = None) -> int:
    """Return the column count of ``stream`` when it is a terminal, else 100."""
    stream = stream or sys.stdout
    isatty = getattr(stream, "isatty", None)
    if not callable(isatty) or not isatty():
        return RENDER_DEFAULT_WIDTH
    width = Console(file=stream).width
    return width if width > 0 else RENDER_DEFAULT_WIDTH


@contextmanager
def spinner(enabled: bool, label: str = "Thinking", stream: Optional[TextIO] = None) -> Iterator[None]:
    """Show a ``| / - \\`` status spinner on stderr for the duration of the block."""
    stream = stream or sys.stderr
    isatty = getattr(stream, "isatty", None)
    if not enabled or not callable(isatty) or not isatty():
        yield
        return
    console = Console(file=stream)
    with console.status(label.strip() or "Loading", spinner="line"):
        yield


__all__ = ["render_markdown", "terminal_width", "spinner"]
