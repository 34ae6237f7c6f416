"""
Model DTO for provider model listings.

Represents a single selectable model as returned by ``list_models``. Entries
are built fresh on every call and never cached.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Model:
    """A single model listing entry.

    Attributes:
        id: Wire-level identifier used in subsequent ``ask`` calls.
        display_name: Informational label; defaults to ``id`` when the
            provider supplies none.
    """

    id: str
    display_name: str = ""

    def __post_init__(self) -> None:
        if not self.display_name:
            object.__setattr__(self, "display_name", self.id)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the entry."""
        return asdict(self)


def sort_models(models: list[Model]) -> list[Model]:
    """Return ``models`` sorted ascending by id."""
    return sorted(models, key=lambda m: m.id)


__all__ = ["Model", "sort_models"]
