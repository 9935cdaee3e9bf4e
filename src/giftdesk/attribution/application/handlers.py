"""Command and query handlers of the gift attribution context."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...shared.cqrs.handler import CommandHandler, QueryHandler
from ...shared.cqrs.mediator import get_current_uow
from ...shared.cqrs.response import CommandResponse, QueryResponse
from ...shared.domain.pagination import Page, PerPage, SearchTerm
from ...shared.primitives.exceptions import EntityNotFoundError, OutOfStockError
from ..domain.model import Attribution
from .commands import AttributeGift
from .dto import GiftDTO, ResidentDTO, ResidentPage, StatisticsDTO
from .exceptions import GiftAttributionFailedError
from .queries import (
    CountResidentAttributions,
    GetResident,
    GetStatistics,
    ListGifts,
    ListResidents,
)

if TYPE_CHECKING:
    from ...shared.primitives.id_generator import IIDGenerator
    from ..domain.ports import IAttributionRepository, IGiftRepository, IResidentRepository

logger = logging.getLogger(__name__)


class AttributeGiftHandler(CommandHandler[AttributeGift, str]):
    """Decrease the gift stock and record the attribution in one unit of work.

    The returned response carries only the attribution id. The
    ``GiftAttributed`` event stays on the aggregate until the unit of work
    commits.
    """

    def __init__(
        self,
        residents: IResidentRepository,
        gifts: IGiftRepository,
        attributions: IAttributionRepository,
        id_generator: IIDGenerator,
    ) -> None:
        self._residents = residents
        self._gifts = gifts
        self._attributions = attributions
        self._ids = id_generator

    async def handle(self, command: AttributeGift) -> CommandResponse[str]:
        uow = get_current_uow()

        resident = await self._residents.get(command.resident_id, uow)
        if resident is None:
            raise EntityNotFoundError("Resident", command.resident_id)

        gift = await self._gifts.get(command.gift_id, uow)
        if gift is None:
            raise EntityNotFoundError("Gift", command.gift_id)

        try:
            gift.decrease_stock()
        except OutOfStockError as exc:
            raise GiftAttributionFailedError.stock_depleted(
                resident.id, gift.id, gift.name
            ) from exc

        attribution = Attribution.create_with_details(
            self._ids.next_id(),
            resident_id=resident.id,
            resident_name=resident.full_name,
            resident_email=str(resident.email),
            gift_id=gift.id,
            gift_name=gift.name,
        )

        await self._gifts.save(gift, uow)
        await self._attributions.save(attribution, uow)

        logger.info(
            "Gift %s attributed to resident %s (attribution %s)",
            gift.id,
            resident.id,
            attribution.id,
        )
        return CommandResponse(result=attribution.id)


class ListGiftsHandler(QueryHandler[ListGifts, list[GiftDTO]]):
    def __init__(self, gifts: IGiftRepository) -> None:
        self._gifts = gifts

    async def handle(self, query: ListGifts) -> QueryResponse[list[GiftDTO]]:
        uow = get_current_uow()
        if query.in_stock_only:
            gifts = await self._gifts.list_in_stock(uow)
        else:
            gifts = await self._gifts.list_all(uow)
        return QueryResponse(result=[GiftDTO.from_entity(g) for g in gifts])


class ListResidentsHandler(QueryHandler[ListResidents, ResidentPage]):
    def __init__(self, residents: IResidentRepository) -> None:
        self._residents = residents

    async def handle(self, query: ListResidents) -> QueryResponse[ResidentPage]:
        result = await self._residents.search(
            SearchTerm(query.search),
            Page(query.page),
            PerPage(query.per_page),
            get_current_uow(),
        )
        return QueryResponse(result=ResidentPage.from_result(result))


class GetResidentHandler(QueryHandler[GetResident, ResidentDTO | None]):
    def __init__(self, residents: IResidentRepository) -> None:
        self._residents = residents

    async def handle(self, query: GetResident) -> QueryResponse[ResidentDTO | None]:
        resident = await self._residents.get(query.resident_id, get_current_uow())
        dto = None if resident is None else ResidentDTO.from_entity(resident)
        return QueryResponse(result=dto)


class CountResidentAttributionsHandler(QueryHandler[CountResidentAttributions, int]):
    def __init__(self, attributions: IAttributionRepository) -> None:
        self._attributions = attributions

    async def handle(self, query: CountResidentAttributions) -> QueryResponse[int]:
        count = await self._attributions.count_for_resident_in_year(
            query.resident_id, query.year, get_current_uow()
        )
        return QueryResponse(result=count)


class GetStatisticsHandler(QueryHandler[GetStatistics, StatisticsDTO]):
    """Totals plus the resident split by age group.

    Each resident lands in exactly one group: children first, then seniors,
    everyone else counts as an adult.
    """

    def __init__(
        self,
        residents: IResidentRepository,
        gifts: IGiftRepository,
        attributions: IAttributionRepository,
    ) -> None:
        self._residents = residents
        self._gifts = gifts
        self._attributions = attributions

    async def handle(self, query: GetStatistics) -> QueryResponse[StatisticsDTO]:
        uow = get_current_uow()
        residents = await self._residents.list_all(uow)
        gifts = await self._gifts.list_all(uow)
        attributions = await self._attributions.list_all(uow)

        children = adults = seniors = 0
        for resident in residents:
            if resident.is_child:
                children += 1
            elif resident.is_senior:
                seniors += 1
            else:
                adults += 1

        return QueryResponse(
            result=StatisticsDTO(
                total_residents=len(residents),
                total_gifts=len(gifts),
                total_attributions=len(attributions),
                children=children,
                adults=adults,
                seniors=seniors,
            )
        )
