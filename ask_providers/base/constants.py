"""Base shared constants for provider adapters.

Central location to avoid scattering magic strings and default numbers
across the adapters and the transport helper.

Security
--------
This module contains only generic sentinel strings and numeric defaults.
There are no credentials or tokens embedded.
"""
from __future__ import annotations

# Default HTTP timeout (seconds) for the pooled transport client
DEFAULT_HTTP_TIMEOUT = 60.0

# Error bodies are capped to this many bytes before being embedded in messages
ERROR_BODY_LIMIT_BYTES = 700

# Sampling temperature shared by every chat-style payload
DEFAULT_TEMPERATURE = 0.2

# Error-text fragments that signal a rejected JSON-mode directive
FORMAT_UNSUPPORTED_MARKERS = (
    "response_format",
    "responsemimetype",
    "response_mime_type",
)

__all__ = [
    "DEFAULT_HTTP_TIMEOUT",
    "ERROR_BODY_LIMIT_BYTES",
    "DEFAULT_TEMPERATURE",
    "FORMAT_UNSUPPORTED_MARKERS",
]
