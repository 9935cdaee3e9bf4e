from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from ...shared.adapters.sqlalchemy.repository import SQLAlchemyRepository
from ...shared.domain.value_objects import Email
from ...shared.events.serialization import as_utc
from ..domain.model import GiftRequest, GiftRequestStatus
from .models import GiftRequestModel

if TYPE_CHECKING:
    from ...shared.ports.unit_of_work import UnitOfWork


class SQLAlchemyGiftRequestRepository(SQLAlchemyRepository[GiftRequest, GiftRequestModel]):
    entity_cls = GiftRequest
    model_cls = GiftRequestModel

    def to_model(self, entity: GiftRequest) -> GiftRequestModel:
        return GiftRequestModel(
            id=entity.id,
            requester_name=entity.requester_name,
            requester_email=entity.requester_email.value,
            requester_phone=entity.requester_phone,
            requested_gift=entity.requested_gift,
            motivation=entity.motivation,
            status=entity.status.value,
            created_at=as_utc(entity.created_at),
        )

    def from_model(self, model: GiftRequestModel) -> GiftRequest:
        return GiftRequest(
            id=model.id,
            requester_name=model.requester_name,
            requester_email=Email(model.requester_email),
            requester_phone=model.requester_phone,
            requested_gift=model.requested_gift,
            motivation=model.motivation,
            status=GiftRequestStatus(model.status),
            created_at=as_utc(model.created_at),
        )

    async def list_all(self, uow: UnitOfWork | None = None) -> list[GiftRequest]:
        stmt = select(GiftRequestModel).order_by(GiftRequestModel.created_at.desc())
        return await self._fetch(stmt, uow)
