"""ask_providers.config.env
========================

Which environment variables carry API keys for the built-in providers.

Purpose
-------
- ``ENV_MAP`` names the variable each keyed provider reads by default.
- ``ENV_ALIASES`` lists extra accepted names in lookup order; Gemini also
  honours ``GOOGLE_API_KEY`` after ``GEMINI_API_KEY``.
- Ollama needs no key and has no entry.

Lookups return ``None`` for unknown providers or unset variables; the config
store decides what a missing key means.
"""

from __future__ import annotations

import os
from typing import Dict, Iterator, Optional, Tuple

# provider -> default variable
ENV_MAP: Dict[str, str] = {
    "anthropic": "ANTHROPIC_API_KEY",
    "gemini": "GEMINI_API_KEY",
    "openai": "OPENAI_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
}

# provider -> accepted variables, first match wins
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "gemini": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
}


def get_env_var_name(provider: str) -> Optional[str]:
    """Return the canonical environment variable name for a provider."""
    return ENV_MAP.get((provider or "").strip().lower())


def get_env_var_candidates(provider: str) -> Iterator[str]:
    """Yield acceptable environment variable names for a provider.

    The canonical name is yielded first, followed by any aliases.
    """
    p = (provider or "").strip().lower()
    canonical = ENV_MAP.get(p)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(p, ()):
        if alias != canonical:
            yield alias


def read_env(name: Optional[str]) -> Optional[str]:
    """Return the trimmed value of ``name`` or ``None`` when unset/blank."""
    if not name or not name.strip():
        return None
    value = os.environ.get(name.strip(), "").strip()
    return value or None


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key for a built-in provider from the process environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        ``(value, env_var_used)`` for the first non-blank candidate, or
        ``(None, None)`` when nothing is set.
    """
    for name in get_env_var_candidates(provider):
        if val := read_env(name):
            return val, name
    return None, None


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "get_env_var_name",
    "get_env_var_candidates",
    "read_env",
    "resolve_provider_key",
]
