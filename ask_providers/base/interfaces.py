"""
Provider-agnostic interfaces (Protocols) for the providers layer.

Re-exports Protocols from ``ask_providers.base.interfaces_parts``.
"""

from __future__ import annotations

from .interfaces_parts import ProviderClient

__all__ = ["ProviderClient"]
