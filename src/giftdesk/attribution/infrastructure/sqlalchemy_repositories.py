"""SQLAlchemy repositories of the gift attribution context."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import func, or_, select

from ...shared.adapters.sqlalchemy.repository import SQLAlchemyRepository
from ...shared.domain.pagination import PaginatedResult, Total
from ...shared.domain.value_objects import Email
from ...shared.events.serialization import as_utc
from ..domain.model import Attribution, Gift, Resident
from ..domain.value_objects import Age
from .models import AttributionModel, GiftModel, ResidentModel

if TYPE_CHECKING:
    from ...shared.domain.pagination import Page, PerPage, SearchTerm
    from ...shared.ports.unit_of_work import UnitOfWork


class SQLAlchemyResidentRepository(SQLAlchemyRepository[Resident, ResidentModel]):
    entity_cls = Resident
    model_cls = ResidentModel

    def to_model(self, entity: Resident) -> ResidentModel:
        return ResidentModel(
            id=entity.id,
            first_name=entity.first_name,
            last_name=entity.last_name,
            age=entity.age.value,
            email=entity.email.value,
        )

    def from_model(self, model: ResidentModel) -> Resident:
        return Resident(
            id=model.id,
            first_name=model.first_name,
            last_name=model.last_name,
            age=Age(model.age),
            email=Email(model.email),
        )

    async def find_by_email(
        self, email: str, uow: UnitOfWork | None = None
    ) -> Resident | None:
        stmt = select(ResidentModel).where(ResidentModel.email == email.strip().lower())
        return await self._fetch_one(stmt, uow)

    async def search(
        self,
        term: SearchTerm,
        page: Page,
        per_page: PerPage,
        uow: UnitOfWork | None = None,
    ) -> PaginatedResult[Resident]:
        stmt = select(ResidentModel)
        count_stmt = select(func.count()).select_from(ResidentModel)
        if not term.is_empty:
            needle = term.value.lower()
            condition = or_(
                func.lower(ResidentModel.first_name).contains(needle, autoescape=True),
                func.lower(ResidentModel.last_name).contains(needle, autoescape=True),
                func.lower(ResidentModel.email).contains(needle, autoescape=True),
            )
            stmt = stmt.where(condition)
            count_stmt = count_stmt.where(condition)

        total = (await self._session(uow).execute(count_stmt)).scalar_one()
        stmt = (
            stmt.order_by(
                func.lower(ResidentModel.last_name), func.lower(ResidentModel.first_name)
            )
            .offset(page.offset(per_page))
            .limit(per_page.value)
        )
        return PaginatedResult(
            items=await self._fetch(stmt, uow),
            page=page,
            per_page=per_page,
            total=Total(int(total)),
        )


class SQLAlchemyGiftRepository(SQLAlchemyRepository[Gift, GiftModel]):
    entity_cls = Gift
    model_cls = GiftModel

    def to_model(self, entity: Gift) -> GiftModel:
        return GiftModel(
            id=entity.id,
            name=entity.name,
            description=entity.description,
            quantity=entity.quantity,
        )

    def from_model(self, model: GiftModel) -> Gift:
        return Gift(
            id=model.id,
            name=model.name,
            description=model.description,
            quantity=model.quantity,
        )

    async def find_by_name(self, name: str, uow: UnitOfWork | None = None) -> Gift | None:
        return await self._fetch_one(select(GiftModel).where(GiftModel.name == name), uow)

    async def list_in_stock(self, uow: UnitOfWork | None = None) -> list[Gift]:
        stmt = select(GiftModel).where(GiftModel.quantity > 0).order_by(GiftModel.name)
        return await self._fetch(stmt, uow)


class SQLAlchemyAttributionRepository(
    SQLAlchemyRepository[Attribution, AttributionModel]
):
    entity_cls = Attribution
    model_cls = AttributionModel

    def to_model(self, entity: Attribution) -> AttributionModel:
        return AttributionModel(
            id=entity.id,
            resident_id=entity.resident_id,
            gift_id=entity.gift_id,
            attributed_at=as_utc(entity.attributed_at),
        )

    def from_model(self, model: AttributionModel) -> Attribution:
        return Attribution(
            id=model.id,
            resident_id=model.resident_id,
            gift_id=model.gift_id,
            attributed_at=as_utc(model.attributed_at),
        )

    async def count_for_resident_in_year(
        self, resident_id: str, year: int, uow: UnitOfWork | None = None
    ) -> int:
        start = datetime(year, 1, 1, tzinfo=timezone.utc)
        end = datetime(year + 1, 1, 1, tzinfo=timezone.utc)
        stmt = (
            select(func.count())
            .select_from(AttributionModel)
            .where(
                AttributionModel.resident_id == resident_id,
                AttributionModel.attributed_at >= start,
                AttributionModel.attributed_at < end,
            )
        )
        result = await self._session(uow).execute(stmt)
        return int(result.scalar_one())
