"""Immutable Value Object base classes."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class ValueObject(BaseModel):
    """Base class for Value Objects.

    Value objects are immutable and defined by their attributes.
    Equality is structural (all fields compared).
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.model_dump() == other.model_dump()

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.model_dump().items())))


_UNSET: Any = object()


class SingleValueObject(ValueObject):
    """Value object wrapping exactly one field called ``value``.

    Accepts the bare scalar wherever the model is built, so ``Age(30)``,
    ``Age(value=30)``, ``Age.model_validate(30)`` and a ``age: Age`` field
    given ``30`` all build the same object.
    """

    def __init__(self, value: Any = _UNSET, /, **data: Any) -> None:
        if value is not _UNSET:
            data["value"] = value
        super().__init__(**data)

    @model_validator(mode="before")
    @classmethod
    def _wrap_scalar(cls, data: Any) -> Any:
        if isinstance(data, dict | BaseModel):
            return data
        return {"value": data}

    def __str__(self) -> str:
        return str(getattr(self, "value", ""))
