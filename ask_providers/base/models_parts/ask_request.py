"""
AskRequest DTO: one normalized single-turn query.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AskRequest:
    """Normalized prompt payload sent to a provider.

    Attributes:
        model: Target model id. Must be non-blank.
        prompt: System instructions.
        question: User text. Must be non-blank.
        expect_json: Ask the provider to enforce a JSON reply where it can.
    """

    model: str
    prompt: str
    question: str
    expect_json: bool = False


__all__ = ["AskRequest"]
