"""Application-level failures of the gift attribution context."""

from __future__ import annotations

from typing import Literal

from ...shared.primitives.exceptions import DomainError, GiftDeskError

FailureReason = Literal["stock_depleted", "unknown_error"]


class NoEligibleGiftError(DomainError):
    """No gift can be picked automatically for a resident."""

    @classmethod
    def no_stock(cls) -> NoEligibleGiftError:
        return cls("No gifts available in stock")

    @classmethod
    def quota_exceeded(cls, max_gifts: int) -> NoEligibleGiftError:
        return cls(
            f"Resident has already received maximum gifts this year ({max_gifts})"
        )

    @classmethod
    def no_criteria_match(cls, reason: str) -> NoEligibleGiftError:
        return cls(f"No eligible gift found: {reason}")


class GiftAttributionFailedError(GiftDeskError):
    """Attributing a specific gift to a specific resident failed."""

    def __init__(
        self,
        message: str,
        *,
        resident_id: str,
        gift_id: str,
        reason: FailureReason,
    ) -> None:
        self.resident_id = resident_id
        self.gift_id = gift_id
        self.reason = reason
        super().__init__(message)

    @classmethod
    def stock_depleted(
        cls, resident_id: str, gift_id: str, gift_name: str
    ) -> GiftAttributionFailedError:
        return cls(
            f'Gift attribution failed: "{gift_name}" is out of stock',
            resident_id=resident_id,
            gift_id=gift_id,
            reason="stock_depleted",
        )

    @classmethod
    def from_exception(
        cls, resident_id: str, gift_id: str, exc: BaseException
    ) -> GiftAttributionFailedError:
        return cls(
            f"Gift attribution failed: {exc}",
            resident_id=resident_id,
            gift_id=gift_id,
            reason="unknown_error",
        )

    def context(self) -> dict[str, str]:
        return {
            "resident_id": self.resident_id,
            "gift_id": self.gift_id,
            "reason": self.reason,
            "message": str(self),
        }
