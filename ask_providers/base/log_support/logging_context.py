"""``LogContext``: the provider/model pair attached to adapter log events."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Fields shared by every event an adapter call emits.

    ``extra`` holds call-specific keys; ``None`` values are dropped by
    :meth:`to_dict` so log lines only carry what is known.
    """

    provider: Optional[str] = None
    model: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        merged: Dict[str, Any] = {"provider": self.provider, "model": self.model, **(self.extra or {})}
        return {k: v for k, v in merged.items() if v is not None}


__all__ = ["LogContext"]
