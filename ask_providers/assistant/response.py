"""Parsing of the assistant's ``{answer, command}`` reply.

Models are asked for strict JSON but frequently wrap it in prose or code
fences. :func:`parse` accepts a bare object or the first balanced object
embedded in a larger string; :func:`fallback_response` salvages a reply that
contains no usable JSON at all.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

_SHELL_TAGS = ("bash", "sh", "zsh")


class AssistantParseError(ValueError):
    """Raised when a model reply cannot be decoded into a :class:`Response`."""


@dataclass(frozen=True)
class Response:
    """Normalized assistant payload consumed by the CLI."""

    answer: str = ""
    command: str = ""

    def has_command(self) -> bool:
        return bool(self.command.strip())

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


def _field(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    return value.strip() if isinstance(value, str) else ""


def _from_mapping(data: Dict[str, Any]) -> Response:
    return Response(answer=_field(data, "answer"), command=_field(data, "command"))


def first_json_object(text: str) -> Optional[str]:
    """Return the first balanced ``{...}`` fragment in ``text`` or ``None``.

    Braces inside JSON strings (including escaped quotes) are ignored.
    """
    start = text.find("{")
    if start < 0:
        return None
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None


def parse(text: str) -> Response:
    """Decode a model reply into a :class:`Response`.

    Raises
    ------
    AssistantParseError
        For blank input, input with no JSON object, or an embedded object
        that does not decode.
    """
    candidate = (text or "").strip()
    if not candidate:
        raise AssistantParseError("empty model response")

    try:
        data = json.loads(candidate)
    except json.JSONDecodeError:
        data = None
    if isinstance(data, dict):
        return _from_mapping(data)

    fragment = first_json_object(candidate)
    if fragment is None:
        raise AssistantParseError("model response is not valid JSON")
    try:
        data = json.loads(fragment)
    except json.JSONDecodeError as exc:
        raise AssistantParseError(f"decode model JSON response: {exc}") from exc
    return _from_mapping(data)


def _command_from_text(text: str) -> str:
    start = text.find("```")
    if start < 0:
        for line in text.split("\n"):
            trimmed = line.strip()
            if trimmed.startswith("$ "):
                return trimmed[2:].strip()
        return ""
    end = text.find("```", start + 3)
    if end < 0:
        return ""
    lines = text[start + 3 : end].strip().split("\n")
    if lines and lines[0].strip() in _SHELL_TAGS:
        lines = lines[1:]
    for line in lines:
        trimmed = line.strip()
        if trimmed:
            return trimmed[2:] if trimmed.startswith("$ ") else trimmed
    return ""


def fallback_response(text: str) -> Response:
    """Build a best-effort :class:`Response` from a non-JSON reply.

    The whole trimmed text becomes the answer. The command is the first line
    of the first fenced block (skipping a ``bash``/``sh``/``zsh`` tag line),
    or failing that the first line beginning with ``$ ``.
    """
    text = (text or "").strip()
    if not text:
        return Response()
    return Response(answer=text, command=_command_from_text(text))


__all__ = ["AssistantParseError", "Response", "first_json_object", "parse", "fallback_response"]
