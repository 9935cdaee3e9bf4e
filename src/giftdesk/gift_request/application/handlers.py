from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...shared.cqrs.handler import CommandHandler, QueryHandler
from ...shared.cqrs.mediator import get_current_uow
from ...shared.cqrs.response import CommandResponse, QueryResponse
from ...shared.domain.events import utc_now
from ..domain.model import GiftRequest
from .commands import SubmitGiftRequest
from .dto import GiftRequestSummary
from .queries import ListGiftRequests

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from ...shared.primitives.id_generator import IIDGenerator
    from ..domain.ports import IGiftRequestRepository

logger = logging.getLogger(__name__)


class SubmitGiftRequestHandler(CommandHandler[SubmitGiftRequest, str]):
    def __init__(
        self, requests: IGiftRequestRepository, id_generator: IIDGenerator
    ) -> None:
        self._requests = requests
        self._ids = id_generator

    async def handle(self, command: SubmitGiftRequest) -> CommandResponse[str]:
        request = GiftRequest.create(
            self._ids.next_id(),
            requester_name=command.requester_name,
            requester_email=command.requester_email,
            requester_phone=command.requester_phone,
            requested_gift=command.requested_gift,
            motivation=command.motivation,
        )
        await self._requests.save(request, get_current_uow())
        logger.info("Gift request %s submitted by %s", request.id, request.requester_email)
        return CommandResponse(result=request.id)


class ListGiftRequestsHandler(QueryHandler[ListGiftRequests, list[GiftRequestSummary]]):
    def __init__(
        self,
        requests: IGiftRequestRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._requests = requests
        self._clock = clock

    async def handle(
        self, query: ListGiftRequests
    ) -> QueryResponse[list[GiftRequestSummary]]:
        requests = await self._requests.list_all(get_current_uow())
        if query.pending_only:
            requests = [r for r in requests if r.is_pending]
        requests.sort(key=lambda r: r.created_at, reverse=True)
        now = self._clock()
        return QueryResponse(
            result=[GiftRequestSummary.from_entity(r, now) for r in requests]
        )
