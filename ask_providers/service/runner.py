"""Interactive confirmation and execution of a suggested shell command.

``prompt_and_run`` shows ``$ <command>`` prefilled on an editable line:

- Enter runs the (possibly edited) line with ``$SHELL -lc``.
- Ctrl+C copies the original command to the clipboard instead.
- Ctrl+D exits without running anything.
"""

from __future__ import annotations

import os
import subprocess
import sys
from typing import List, Optional, Sequence, TextIO, Tuple

from ..base.logging import get_logger, log_event

_logger = get_logger("ask.runner")

ClipboardCommand = Tuple[str, ...]


def clipboard_commands(platform: str) -> List[ClipboardCommand]:
    """Return candidate clipboard commands for ``platform`` in preference order."""
    if platform == "darwin":
        return [("pbcopy",)]
    if platform.startswith("win"):
        return [("cmd", "/c", "clip")]
    return [
        ("wl-copy",),
        ("xclip", "-selection", "clipboard"),
        ("xsel", "--clipboard", "--input"),
    ]


def copy_to_clipboard(text: str, platform: Optional[str] = None) -> bool:
    """Pipe ``text`` into the first clipboard tool that succeeds."""
    text = text.strip()
    if not text:
        return False
    for argv in clipboard_commands(platform or sys.platform):
        try:
            subprocess.run(list(argv), input=text, text=True, check=True, capture_output=True)
        except (OSError, subprocess.CalledProcessError):
            continue
        return True
    return False


def _read_prefilled(prompt: str, default: str) -> str:
    try:
        import readline
    except ImportError:
        # no line editor on this platform; the command is shown above the prompt
        print(default)
        return input(prompt)
    readline.set_startup_hook(lambda: readline.insert_text(default))
    try:
        return input(prompt)
    finally:
        readline.set_startup_hook()


def shell_argv(command: str, environ: Optional[dict] = None) -> Sequence[str]:
    shell = (environ if environ is not None else os.environ).get("SHELL", "").strip() or "sh"
    return [shell, "-lc", command]


def prompt_and_run(command: str, stdout: Optional[TextIO] = None) -> int:
    """Offer ``command`` for confirmation and run it.

    Returns
    -------
    int
        The command's exit status, or ``0`` when nothing was run.
    """
    command = command.strip()
    if not command:
        return 0
    stdout = stdout or sys.stdout
    print(file=stdout)
    try:
        line = _read_prefilled("$ ", command)
    except KeyboardInterrupt:
        print(file=stdout)
        if copy_to_clipboard(command):
            print("Command copied to clipboard.", file=stdout)
        else:
            print("Command cancelled.", file=stdout)
        return 0
    except EOFError:
        print(file=stdout)
        return 0

    line = line.strip() or command
    log_event(_logger, "runner.exec", edited=line != command)
    stdout.flush()
    return subprocess.run(list(shell_argv(line)), check=False).returncode


__all__ = ["clipboard_commands", "copy_to_clipboard", "shell_argv", "prompt_and_run"]
