"""Small helpers shared by the ``ask`` command handlers.

Functions
---------
- ``parse_timeout(value)``: argparse ``type`` for ``--timeout`` values such as
  ``45``, ``30s``, ``2m`` or ``1h30m``.
- ``parse_header(value)``: argparse ``type`` for repeated ``--header k=v``.
- ``mask_key(value)``: hide all but the last four characters of a secret.
- ``format_table(rows)``: left-aligned columns separated by two spaces.
- ``filter_models(models, query)``: case-insensitive id/label substring match.
- ``read_line`` / ``read_secret``: prompt helpers for interactive commands.
"""

from __future__ import annotations

import argparse
import getpass
import re
import sys
from typing import List, Optional, Sequence, TextIO, Tuple

from ...base.models import Model

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|h|m|s)")
_UNIT_SECONDS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}


def parse_timeout(value: str) -> float:
    """Parse a positive timeout in seconds.

    Bare integers are seconds; otherwise the value must be a sequence of
    ``<number><unit>`` parts with units ``ms``, ``s``, ``m`` or ``h``.

    Raises
    ------
    argparse.ArgumentTypeError
        If the value is empty, malformed or not positive.
    """
    raw = (value or "").strip()
    if not raw:
        raise argparse.ArgumentTypeError("timeout value is empty")
    if raw.isdigit():
        seconds = float(int(raw))
    else:
        pos = 0
        seconds = 0.0
        for match in _DURATION_PART.finditer(raw):
            if match.start() != pos:
                break
            seconds += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
            pos = match.end()
        if pos != len(raw) or pos == 0:
            raise argparse.ArgumentTypeError(
                "timeout must be a positive integer seconds or duration"
            )
    if seconds <= 0:
        raise argparse.ArgumentTypeError("timeout must be positive")
    return seconds


def parse_header(value: str) -> Tuple[str, str]:
    """Parse ``key=value`` into a trimmed pair; both halves must be non-blank."""
    key, sep, val = (value or "").partition("=")
    key, val = key.strip(), val.strip()
    if not sep or not key or not val:
        raise argparse.ArgumentTypeError("--header: expected key=value")
    return key, val


def mask_key(value: str) -> str:
    value = (value or "").strip()
    if not value:
        return "<empty>"
    if len(value) <= 6:
        return "******"
    return "*" * (len(value) - 4) + value[-4:]


def format_table(rows: Sequence[Sequence[str]]) -> str:
    """Render ``rows`` as aligned columns (two-space gutter, no trailing blanks)."""
    if not rows:
        return ""
    widths = [0] * max(len(r) for r in rows)
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))
    lines = []
    for row in rows:
        cells = [cell.ljust(widths[i]) for i, cell in enumerate(row)]
        lines.append("  ".join(cells).rstrip())
    return "\n".join(lines)


def filter_models(models: Sequence[Model], query: Optional[str]) -> List[Model]:
    q = (query or "").strip().lower()
    if not q:
        return list(models)
    return [m for m in models if q in m.id.lower() or q in m.display_name.lower()]


def read_line(prompt: str, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> Optional[str]:
    """Prompt on ``stdout`` and read one line; ``None`` at end of input."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stdout.write(prompt)
    stdout.flush()
    line = stdin.readline()
    if not line:
        return None
    return line.strip()


def read_secret(prompt: str) -> str:
    """Read a secret without echo when stdin is a terminal."""
    if sys.stdin.isatty():
        return getpass.getpass(prompt).strip()
    return (read_line(prompt) or "").strip()


__all__ = [
    "parse_timeout",
    "parse_header",
    "mask_key",
    "format_table",
    "filter_models",
    "read_line",
    "read_secret",
]
