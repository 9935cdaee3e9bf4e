"""Value objects of the gift attribution context."""

from __future__ import annotations

from pydantic import field_validator

from ...shared.domain.value_object import SingleValueObject
from ...shared.domain.value_objects import UuidIdentifier

ADULT_AGE = 18
SENIOR_AGE = 65
MAX_AGE = 150


class Age(SingleValueObject):
    """Age in whole years, 0 to 150."""

    value: int

    @field_validator("value")
    @classmethod
    def _in_range(cls, value: int) -> int:
        if value < 0:
            raise ValueError("Age cannot be negative")
        if value > MAX_AGE:
            raise ValueError(f"Age cannot exceed {MAX_AGE} years")
        return value

    @property
    def is_child(self) -> bool:
        return self.value < ADULT_AGE

    @property
    def is_adult(self) -> bool:
        return self.value >= ADULT_AGE

    @property
    def is_senior(self) -> bool:
        return self.value >= SENIOR_AGE


class ResidentId(UuidIdentifier):
    pass


class GiftId(UuidIdentifier):
    pass
