"""Commands of the gift attribution context."""

from __future__ import annotations

from pydantic import field_validator

from ...shared.cqrs.command import Command
from ..domain.value_objects import GiftId, ResidentId


class AttributeGift(Command[str]):
    """Give one unit of a gift to a resident. Returns the attribution id."""

    resident_id: str
    gift_id: str

    @field_validator("resident_id")
    @classmethod
    def _resident_id(cls, value: str) -> str:
        return ResidentId(value).value

    @field_validator("gift_id")
    @classmethod
    def _gift_id(cls, value: str) -> str:
        return GiftId(value).value
