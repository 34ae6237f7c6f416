"""Interfaces (Protocols) split into single-class modules."""

from .provider_client import ProviderClient

__all__ = ["ProviderClient"]
