"""HTTP utilities package for providers.

Exposes pooled httpx clients, the ``do_json`` transport helper and the
lenient ``Envelope`` base for response models.
"""

from .client import get_httpx_client, close_all_clients
from .envelope import Envelope
from .transport import clean_headers, do_json

__all__ = ["get_httpx_client", "close_all_clients", "Envelope", "clean_headers", "do_json"]
