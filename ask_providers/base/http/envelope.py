"""Base class for provider response envelopes.

Envelopes are pydantic models describing only the fields an adapter reads.
Unknown keys are ignored and explicit JSON ``null`` values fall back to the
field default, so a sparse or partially-null body decodes to an envelope with
empty lists/strings rather than failing; adapters then report missing content
as a content error.

``null`` items inside list fields become the item's zero value (``""`` for
strings, an empty envelope for nested models) and are then filtered by the
adapters like any other blank entry.
"""
from __future__ import annotations

from typing import Any, Callable, Optional, get_args

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator, model_validator


def _zero_factory(annotation: Any) -> Optional[Callable[[], Any]]:
    args = get_args(annotation)
    item = args[0] if args else None
    if item is str:
        return str
    if isinstance(item, type) and issubclass(item, BaseModel):
        return dict
    return None


class Envelope(BaseModel):
    """Lenient response envelope base."""

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    @field_validator("*", mode="before")
    @classmethod
    def _zero_null_items(cls, value: Any, info: ValidationInfo) -> Any:
        if not isinstance(value, list) or not any(item is None for item in value):
            return value
        zero = _zero_factory(cls.model_fields[info.field_name].annotation)
        if zero is None:
            return value
        return [zero() if item is None else item for item in value]


__all__ = ["Envelope"]
