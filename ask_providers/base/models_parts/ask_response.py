"""
AskResponse DTO: normalized provider reply.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AskResponse:
    """Normalized reply text, trimmed of surrounding whitespace.

    Adapters only construct this on success, so ``text`` is never empty.
    """

    text: str


__all__ = ["AskResponse"]
