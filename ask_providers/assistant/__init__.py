"""Assistant layer: prompt building, reply parsing and default model choice."""

from .prompt import build_prompt
from .response import AssistantParseError, Response, fallback_response, first_json_object, parse
from .selection import select_default_model

__all__ = [
    "AssistantParseError",
    "Response",
    "build_prompt",
    "fallback_response",
    "first_json_object",
    "parse",
    "select_default_model",
]
