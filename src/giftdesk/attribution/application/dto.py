"""Read models returned by the attribution queries and services."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ...shared.domain.pagination import PaginatedResult
    from ..domain.model import Gift, Resident


@dataclass(frozen=True)
class GiftDTO:
    id: str
    name: str
    description: str
    quantity: int

    @classmethod
    def from_entity(cls, gift: Gift) -> GiftDTO:
        return cls(
            id=gift.id,
            name=gift.name,
            description=gift.description,
            quantity=gift.quantity,
        )

    @property
    def is_in_stock(self) -> bool:
        return self.quantity > 0


@dataclass(frozen=True)
class ResidentDTO:
    id: str
    first_name: str
    last_name: str
    full_name: str
    age: int
    email: str
    is_child: bool
    is_senior: bool

    @classmethod
    def from_entity(cls, resident: Resident) -> ResidentDTO:
        return cls(
            id=resident.id,
            first_name=resident.first_name,
            last_name=resident.last_name,
            full_name=resident.full_name,
            age=resident.age.value,
            email=str(resident.email),
            is_child=resident.is_child,
            is_senior=resident.is_senior,
        )


@dataclass(frozen=True)
class ResidentPage:
    """One page of residents plus the pagination state."""

    residents: list[ResidentDTO]
    current_page: int
    per_page: int
    total: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def from_result(cls, result: PaginatedResult[Resident]) -> ResidentPage:
        return cls(
            residents=[ResidentDTO.from_entity(r) for r in result.items],
            current_page=result.page.value,
            per_page=result.per_page.value,
            total=result.total.value,
            total_pages=result.total_pages,
            has_next_page=result.has_next_page,
            has_previous_page=result.has_previous_page,
        )


@dataclass(frozen=True)
class StatisticsDTO:
    total_residents: int
    total_gifts: int
    total_attributions: int
    children: int
    adults: int
    seniors: int


@dataclass(frozen=True)
class AttributionResult:
    """Outcome of one automatic attribution, successful or not."""

    success: bool
    resident_id: str
    resident_name: str
    attributed_at: datetime
    gift_id: str = ""
    gift_name: str = ""
    error_message: str | None = None

    @classmethod
    def succeeded(
        cls,
        resident_id: str,
        resident_name: str,
        gift_id: str,
        gift_name: str,
        attributed_at: datetime,
    ) -> AttributionResult:
        return cls(
            success=True,
            resident_id=resident_id,
            resident_name=resident_name,
            gift_id=gift_id,
            gift_name=gift_name,
            attributed_at=attributed_at,
        )

    @classmethod
    def failed(
        cls,
        resident_id: str,
        reason: str,
        attributed_at: datetime,
        resident_name: str | None = None,
    ) -> AttributionResult:
        return cls(
            success=False,
            resident_id=resident_id,
            resident_name=resident_name or "Unknown",
            attributed_at=attributed_at,
            error_message=reason,
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["attributed_at"] = self.attributed_at.isoformat()
        return data
