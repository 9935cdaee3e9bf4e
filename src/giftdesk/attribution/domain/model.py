"""Entities and the Attribution aggregate of the gift attribution context."""

from __future__ import annotations

from datetime import datetime

from pydantic import AwareDatetime, Field, field_validator

from ...shared.domain.aggregate import AggregateRoot, Entity
from ...shared.domain.events import utc_now
from ...shared.domain.value_objects import Email
from ...shared.primitives.exceptions import OutOfStockError
from .events import GiftAttributed
from .value_objects import Age

GIFT_NAME_MIN_LENGTH = 3
GIFT_NAME_MAX_LENGTH = 100
MAX_GIFT_STOCK = 1000


def _required_text(value: str, label: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(f"{label} cannot be empty")
    return value


class Resident(Entity[str]):
    """A resident of the town who may receive gifts."""

    first_name: str
    last_name: str
    age: Age
    email: Email

    @field_validator("first_name")
    @classmethod
    def _first_name(cls, value: str) -> str:
        return _required_text(value, "First name")

    @field_validator("last_name")
    @classmethod
    def _last_name(cls, value: str) -> str:
        return _required_text(value, "Last name")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_child(self) -> bool:
        return self.age.is_child

    @property
    def is_adult(self) -> bool:
        return self.age.is_adult

    @property
    def is_senior(self) -> bool:
        return self.age.is_senior


class Gift(Entity[str]):
    """A gift in the catalogue, with a stock counter."""

    name: str
    description: str = ""
    quantity: int = Field(ge=0, le=MAX_GIFT_STOCK)

    @field_validator("name")
    @classmethod
    def _name(cls, value: str) -> str:
        value = _required_text(value, "Gift name")
        if len(value) < GIFT_NAME_MIN_LENGTH:
            raise ValueError(
                f"Gift name must be at least {GIFT_NAME_MIN_LENGTH} characters"
            )
        if len(value) > GIFT_NAME_MAX_LENGTH:
            raise ValueError(f"Gift name cannot exceed {GIFT_NAME_MAX_LENGTH} characters")
        return value

    @field_validator("description")
    @classmethod
    def _description(cls, value: str) -> str:
        return value.strip()

    @property
    def is_in_stock(self) -> bool:
        return self.quantity > 0

    def is_available(self, requested: int) -> bool:
        return self.quantity >= requested

    @property
    def can_be_attributed(self) -> bool:
        return self.quantity > 0

    def decrease_stock(self) -> None:
        """Take one unit out of stock.

        Raises:
            OutOfStockError: If nothing is left.
        """
        if not self.can_be_attributed:
            raise OutOfStockError(self.name)
        self.quantity -= 1


class Attribution(AggregateRoot[str]):
    """The fact that one gift went to one resident."""

    resident_id: str
    gift_id: str
    attributed_at: AwareDatetime = Field(default_factory=utc_now)

    @field_validator("id", "resident_id", "gift_id")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        return _required_text(value, "Identifier")

    @classmethod
    def create(cls, attribution_id: str, resident_id: str, gift_id: str) -> Attribution:
        """Build an attribution without announcing it (bulk imports, fixtures)."""
        return cls(id=attribution_id, resident_id=resident_id, gift_id=gift_id)

    @classmethod
    def create_with_details(
        cls,
        attribution_id: str,
        *,
        resident_id: str,
        resident_name: str,
        resident_email: str,
        gift_id: str,
        gift_name: str,
        attributed_at: datetime | None = None,
    ) -> Attribution:
        """Build an attribution and record :class:`GiftAttributed`.

        The denormalised names and e-mail travel with the event so that
        subscribers can notify the resident without reloading anything.
        """
        attribution = cls(
            id=attribution_id,
            resident_id=resident_id,
            gift_id=gift_id,
            attributed_at=attributed_at or utc_now(),
        )
        attribution._record_that(
            GiftAttributed(
                aggregate_id=attribution.id,
                occurred_on=attribution.attributed_at,
                resident_id=resident_id,
                resident_name=resident_name,
                resident_email=resident_email,
                gift_id=gift_id,
                gift_name=gift_name,
            )
        )
        return attribution
