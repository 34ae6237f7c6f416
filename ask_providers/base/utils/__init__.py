"""Small pure helpers shared by the adapters."""

from .text import ensure_leading_slash, join_url, normalize_name, strip_prefix_once, truncate

__all__ = ["ensure_leading_slash", "join_url", "normalize_name", "strip_prefix_once", "truncate"]
