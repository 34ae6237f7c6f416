"""System prompt construction for ``ask`` provider calls."""

from __future__ import annotations

_PLAIN_ANSWER = (
    "In the answer field, use plain text only (no markdown formatting, headings, "
    "bullet markers, or code fences). "
)
_MARKDOWN_ANSWER = (
    "In the answer field, use clean Markdown by default (short headings, concise "
    "bullet lists, and inline code where helpful). "
    "Keep formatting readable and minimal. Do not use markdown code fences. "
)


def build_prompt(shell: str, cwd: str, os_name: str, allow_markdown: bool) -> str:
    """Return the strict-JSON system prompt with a terminal environment line."""
    instructions = (
        "You are a terminal assistant. Return only strict JSON with exactly these keys: answer, command. "
        "If the user asks for a terminal command, set command to one runnable command and include "
        "concise explanation in answer unless specified otherwise. "
        "If no command is needed, set command to an empty string. "
        + (_MARKDOWN_ANSWER if allow_markdown else _PLAIN_ANSWER)
        + "Do not include any text outside JSON."
    )
    return f"{instructions}\nEnvironment: os={os_name}, shell={shell}, cwd={cwd}"


__all__ = ["build_prompt"]
