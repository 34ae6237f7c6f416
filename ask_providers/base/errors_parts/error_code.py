"""
Normalized provider error codes (taxonomy).

Defines the `ErrorCode` enumeration used across provider adapters, the
transport helper and the CLI. Values are lowercase snake_case and are
considered a stable public contract for logging.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories.

    - ``VALIDATION``: request rejected before any I/O (blank model/question).
    - ``CONFIGURATION``: missing API key or base URL.
    - ``TRANSPORT``: request build, network, timeout, cancellation or HTTP >= 400.
    - ``DECODE``: response body is not JSON or lacks the expected shape.
    - ``CONTENT``: call succeeded but carried no usable text.
    """

    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    TRANSPORT = "transport"
    DECODE = "decode"
    CONTENT = "content"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
