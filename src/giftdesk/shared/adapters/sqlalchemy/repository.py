"""
Generic SQLAlchemy repository mapping domain entities to ORM models.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from sqlalchemy import func, select

from ...primitives.exceptions import UnitOfWorkError
from .uow import SQLAlchemyUnitOfWork

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from ...ports.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M")


class SQLAlchemyRepository(ABC, Generic[T, M]):
    """
    Base repository working through the session of the active unit of work.

    Subclasses set ``entity_cls``/``model_cls`` and implement the two mapping
    functions. Loaded entities are cached in the unit of work's identity map,
    so two lookups of the same id inside one transaction return the same
    domain object and every change (and every recorded event) lands on it.
    """

    entity_cls: type[T]
    model_cls: type[M]

    @abstractmethod
    def to_model(self, entity: T) -> M:
        """Build the ORM row for *entity*."""

    @abstractmethod
    def from_model(self, model: M) -> T:
        """Rebuild the domain entity from its ORM row."""

    # ── Session access ───────────────────────────────────────────

    @staticmethod
    def _require_uow(uow: UnitOfWork | None) -> SQLAlchemyUnitOfWork:
        if not isinstance(uow, SQLAlchemyUnitOfWork):
            raise UnitOfWorkError(
                "SQLAlchemy repositories must be called inside a "
                f"SQLAlchemyUnitOfWork, got {type(uow).__name__}"
            )
        return uow

    def _session(self, uow: UnitOfWork | None) -> AsyncSession:
        return self._require_uow(uow).session

    def _track(self, model: M, uow: UnitOfWork | None) -> T:
        active = self._require_uow(uow)
        entity_id = getattr(model, "id", None)
        cached = active.get_managed(self.entity_cls, entity_id)
        if cached is not None:
            return cached  # type: ignore[no-any-return]
        entity = self.from_model(model)
        active.register(entity)
        return entity

    # ── CRUD ─────────────────────────────────────────────────────

    async def save(self, entity: T, uow: UnitOfWork | None = None) -> None:
        active = self._require_uow(uow)
        await active.session.merge(self.to_model(entity))
        active.register(entity)

    async def get(self, entity_id: object, uow: UnitOfWork | None = None) -> T | None:
        active = self._require_uow(uow)
        cached = active.get_managed(self.entity_cls, entity_id)
        if cached is not None:
            return cached  # type: ignore[no-any-return]
        model = await active.session.get(self.model_cls, entity_id)
        if model is None:
            return None
        return self._track(model, active)

    async def delete(self, entity_id: object, uow: UnitOfWork | None = None) -> None:
        session = self._session(uow)
        model = await session.get(self.model_cls, entity_id)
        if model is not None:
            await session.delete(model)

    async def list_all(self, uow: UnitOfWork | None = None) -> list[T]:
        return await self._fetch(select(self.model_cls), uow)

    async def count(self, uow: UnitOfWork | None = None) -> int:
        stmt = select(func.count()).select_from(self.model_cls)
        result = await self._session(uow).execute(stmt)
        return int(result.scalar_one())

    # ── Helpers ──────────────────────────────────────────────────

    async def _fetch(self, stmt: Select[Any], uow: UnitOfWork | None) -> list[T]:
        result = await self._session(uow).execute(stmt)
        return [self._track(model, uow) for model in result.scalars().all()]

    async def _fetch_one(self, stmt: Select[Any], uow: UnitOfWork | None) -> T | None:
        result = await self._session(uow).execute(stmt.limit(1))
        model = result.scalars().first()
        return None if model is None else self._track(model, uow)
