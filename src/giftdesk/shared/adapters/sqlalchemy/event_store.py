"""
SQLAlchemy implementation of the Event Store.

The store writes through its own short-lived sessions: events are appended
after the business transaction has committed, so they must never piggyback on
(or re-open) the unit of work that produced them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from ...domain.events import utc_now
from ...events.serialization import as_utc
from ...ports.event_store import IEventStore, StoredEvent
from ...primitives.exceptions import EventStoreError
from .models import StoredEventModel

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from ...domain.events import DomainEvent
    from ...events.serialization import EventSerializer


class SQLAlchemyEventStore(IEventStore):
    """
    Event Store implementation using SQLAlchemy.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        serializer: EventSerializer,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._session_factory = session_factory
        self._serializer = serializer
        self._clock = clock

    async def append(self, event: DomainEvent) -> None:
        await self.append_all([event])

    async def append_all(self, events: list[DomainEvent]) -> None:
        """
        Append a batch in a single transaction.

        Position is assigned by the database autoincrement key.
        """
        if not events:
            return
        recorded_at = self._clock()
        models = [
            self._to_model(self._serializer.serialize(event, recorded_at=recorded_at))
            for event in events
        ]
        try:
            async with self._session_factory() as session, session.begin():
                session.add_all(models)
        except SQLAlchemyError as e:
            raise EventStoreError(f"Failed to append {len(models)} event(s): {e}") from e

    async def get_events_for_aggregate(self, aggregate_id: str) -> list[DomainEvent]:
        stmt = select(StoredEventModel).where(
            StoredEventModel.aggregate_id == aggregate_id
        )
        return await self._load(stmt)

    async def get_events_by_type(
        self, event_type: str | type[DomainEvent]
    ) -> list[DomainEvent]:
        name = self._serializer.type_name(event_type)
        stmt = select(StoredEventModel).where(StoredEventModel.event_type == name)
        return await self._load(stmt)

    async def get_all_events(self) -> list[DomainEvent]:
        return await self._load(select(StoredEventModel))

    async def get_stored_events(self) -> list[StoredEvent]:
        """Raw records in log order (audit / debugging)."""
        stmt = select(StoredEventModel).order_by(StoredEventModel.position)
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [self._to_dataclass(m) for m in result.scalars().all()]

    async def _load(self, stmt: Select[tuple[StoredEventModel]]) -> list[DomainEvent]:
        stmt = stmt.order_by(StoredEventModel.occurred_on, StoredEventModel.position)
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                records = [self._to_dataclass(m) for m in result.scalars().all()]
        except SQLAlchemyError as e:
            raise EventStoreError(f"Failed to read events: {e}") from e
        return [self._serializer.deserialize(record) for record in records]

    @staticmethod
    def _to_model(stored: StoredEvent) -> StoredEventModel:
        return StoredEventModel(
            event_id=stored.event_id,
            event_type=stored.event_type,
            aggregate_id=stored.aggregate_id,
            payload=stored.payload,
            occurred_on=stored.occurred_on,
            recorded_at=stored.recorded_at,
        )

    @staticmethod
    def _to_dataclass(model: StoredEventModel) -> StoredEvent:
        return StoredEvent(
            event_id=model.event_id,
            event_type=model.event_type,
            aggregate_id=model.aggregate_id,
            payload=dict(model.payload),
            occurred_on=as_utc(model.occurred_on),
            recorded_at=as_utc(model.recorded_at),
            position=model.position,
        )
