"""Message content extraction for OpenAI-style chat responses.

A chat completion's ``message.content`` is either a plain string or a list of
typed fragments (``[{"type": "text", "text": "..."}]``). This module folds
both shapes into one trimmed string.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def extract_message_content(content: Any) -> str:
    """Normalize a provider ``content`` value into text.

    Parameters
    ----------
    content:
        A string, or a list whose mapping items may carry a ``text`` field.

    Returns
    -------
    str
        Trimmed string content, or the non-blank ``text`` fragments joined
        with newlines in their original order.

    Raises
    ------
    ValueError
        ``"array content had no text parts"`` when a list yields no usable
        fragment; ``"unsupported content type <name>"`` for any other shape.
    """
    if isinstance(content, str):
        return content.strip()
    if isinstance(content, list):
        parts = []
        for item in content:
            if not isinstance(item, Mapping):
                continue
            text = item.get("text")
            if isinstance(text, str) and text.strip():
                parts.append(text)
        if not parts:
            raise ValueError("array content had no text parts")
        return "\n".join(parts).strip()
    raise ValueError(f"unsupported content type {type(content).__name__}")


__all__ = ["extract_message_content"]
