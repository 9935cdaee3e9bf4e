"""Automatic gift selection on top of the ``AttributeGift`` command."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...shared.domain.events import utc_now
from ...shared.primitives.exceptions import (
    EntityNotFoundError,
    NotFoundError,
    ValidationError,
)
from .commands import AttributeGift
from .dto import AttributionResult
from .exceptions import GiftAttributionFailedError, NoEligibleGiftError
from .queries import CountResidentAttributions, GetResident, ListGifts

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from datetime import datetime

    from ...shared.ports.bus import IMessageBus
    from .dto import GiftDTO, ResidentDTO

logger = logging.getLogger(__name__)

DEFAULT_MAX_GIFTS_PER_YEAR = 3

CHILD_KEYWORDS = ("jouet", "toy")
SENIOR_KEYWORDS = ("livre", "book")


def _matching(gifts: list[GiftDTO], keywords: tuple[str, ...]) -> GiftDTO | None:
    for gift in gifts:
        name = gift.name.lower()
        if any(keyword in name for keyword in keywords):
            return gift
    return None


def select_best_gift(resident: ResidentDTO, gifts: list[GiftDTO]) -> GiftDTO | None:
    """Pick a gift for *resident* among *gifts* (assumed in stock).

    Children get toys and seniors get books when one is available;
    otherwise the first gift wins.
    """
    if not gifts:
        return None
    if resident.is_child:
        preferred = _matching(gifts, CHILD_KEYWORDS)
    elif resident.is_senior:
        preferred = _matching(gifts, SENIOR_KEYWORDS)
    else:
        preferred = None
    return preferred or gifts[0]


class AutomaticGiftAttributionService:
    """Chooses a gift for a resident and attributes it through the mediator.

    Every step goes through the mediator, so each lookup runs in its own
    read scope and the attribution itself commits (and publishes
    ``GiftAttributed``) in its own unit of work.
    """

    def __init__(
        self,
        mediator: IMessageBus,
        *,
        max_gifts_per_year: int = DEFAULT_MAX_GIFTS_PER_YEAR,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._mediator = mediator
        self._max_gifts_per_year = max_gifts_per_year
        self._clock = clock

    async def attribute_automatically(self, resident_id: str) -> AttributionResult:
        """Attribute the best available gift to one resident.

        Raises:
            EntityNotFoundError: If the resident does not exist.
            NoEligibleGiftError: If nothing is in stock or the yearly quota
                is reached.
            GiftAttributionFailedError: If the chosen gift ran out meanwhile.
        """
        resident = (await self._mediator.query(GetResident(resident_id=resident_id))).result
        if resident is None:
            raise EntityNotFoundError("Resident", resident_id)

        gifts = (await self._mediator.query(ListGifts(in_stock_only=True))).result
        if not gifts:
            raise NoEligibleGiftError.no_stock()

        now = self._clock()
        received = (
            await self._mediator.query(
                CountResidentAttributions(resident_id=resident.id, year=now.year)
            )
        ).result
        if received >= self._max_gifts_per_year:
            raise NoEligibleGiftError.quota_exceeded(self._max_gifts_per_year)

        gift = select_best_gift(resident, gifts)
        if gift is None:
            raise NoEligibleGiftError.no_criteria_match("no gift matches the resident")

        await self._mediator.send(AttributeGift(resident_id=resident.id, gift_id=gift.id))

        logger.info(
            "Automatically attributed gift %s to resident %s", gift.name, resident.full_name
        )
        return AttributionResult.succeeded(
            resident_id=resident.id,
            resident_name=resident.full_name,
            gift_id=gift.id,
            gift_name=gift.name,
            attributed_at=now,
        )

    async def attribute_to_all(self, resident_ids: Iterable[str]) -> list[AttributionResult]:
        """Attribute a gift to each resident, collecting failures instead of raising."""
        results: list[AttributionResult] = []
        for resident_id in resident_ids:
            try:
                results.append(await self.attribute_automatically(resident_id))
            except (
                NoEligibleGiftError,
                NotFoundError,
                GiftAttributionFailedError,
                ValidationError,
            ) as exc:
                logger.warning("Automatic attribution for %s failed: %s", resident_id, exc)
                results.append(
                    AttributionResult.failed(resident_id, str(exc), self._clock())
                )
        return results
