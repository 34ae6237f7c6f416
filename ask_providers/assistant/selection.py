"""Automatic model choice when no model is configured for a provider."""

from __future__ import annotations

from typing import Sequence

from ..base.models import Model
from ..config.defaults import PREFERRED_MODEL_TOKENS


def select_default_model(models: Sequence[Model]) -> str:
    """Return the id of the first model matching a preferred token.

    Tokens are tried in priority order (``mini``, ``flash``, ...), each
    against the models in the given order. Without a match the
    lexicographically smallest id wins; an empty list yields ``""``.
    """
    if not models:
        return ""
    for token in PREFERRED_MODEL_TOKENS:
        for model in models:
            if token in model.id.lower():
                return model.id
    return min(m.id for m in models)


__all__ = ["select_default_model"]
