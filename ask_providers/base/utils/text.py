"""String and URL helpers used across adapters and the transport helper."""
from __future__ import annotations


def normalize_name(name: str | None) -> str:
    """Lowercase and trim a provider name (``None`` becomes ``""``)."""
    return (name or "").strip().lower()


def truncate(text: str, max_bytes: int) -> str:
    """Cap ``text`` at ``max_bytes`` UTF-8 bytes, appending ``...`` when cut.

    A multi-byte character split by the cap is dropped rather than emitted
    half-encoded.
    """
    raw = text.encode("utf-8")
    if len(raw) <= max_bytes:
        return text
    return raw[:max_bytes].decode("utf-8", errors="ignore") + "..."


def ensure_leading_slash(path: str | None) -> str:
    """Return ``path`` trimmed with a leading ``/``; blank input stays blank."""
    path = (path or "").strip()
    if not path:
        return ""
    return path if path.startswith("/") else "/" + path


def join_url(base: str, path: str | None) -> str:
    """Join a base URL and a path.

    The base loses trailing slashes, absolute ``http(s)://`` paths are
    returned unchanged, and relative paths get a leading ``/``.
    """
    base = (base or "").strip().rstrip("/")
    path = (path or "").strip()
    if not path:
        return base
    if path.startswith(("http://", "https://")):
        return path
    return base + ensure_leading_slash(path)


def strip_prefix_once(value: str, prefix: str) -> str:
    """Remove a single leading ``prefix`` from ``value`` if present."""
    return value[len(prefix):] if value.startswith(prefix) else value


__all__ = ["normalize_name", "truncate", "ensure_leading_slash", "join_url", "strip_prefix_once"]
