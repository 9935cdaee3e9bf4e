"""InMemoryEventStore: list-backed append-only log."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...domain.events import utc_now
from ...ports.event_store import IEventStore, StoredEvent

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from datetime import datetime

    from ...domain.events import DomainEvent
    from ...events.serialization import EventSerializer


class InMemoryEventStore(IEventStore):
    """In-memory implementation of ``IEventStore``.

    Events are serialised on append exactly as a durable store would, so
    reads go through the same registry hydration path.
    """

    def __init__(
        self,
        serializer: EventSerializer,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._serializer = serializer
        self._clock = clock
        self._records: list[StoredEvent] = []

    async def append(self, event: DomainEvent) -> None:
        await self.append_all([event])

    async def append_all(self, events: list[DomainEvent]) -> None:
        recorded_at = self._clock()
        # Serialise the whole batch before touching the log.
        records = [
            self._serializer.serialize(
                event, recorded_at=recorded_at, position=len(self._records) + offset
            )
            for offset, event in enumerate(events, start=1)
        ]
        self._records.extend(records)

    async def get_events_for_aggregate(self, aggregate_id: str) -> list[DomainEvent]:
        return self._rebuild(r for r in self._records if r.aggregate_id == aggregate_id)

    async def get_events_by_type(
        self, event_type: str | type[DomainEvent]
    ) -> list[DomainEvent]:
        name = self._serializer.type_name(event_type)
        return self._rebuild(r for r in self._records if r.event_type == name)

    async def get_all_events(self) -> list[DomainEvent]:
        return self._rebuild(self._records)

    def _rebuild(self, records: Iterable[StoredEvent]) -> list[DomainEvent]:
        ordered = sorted(records, key=lambda r: (r.occurred_on, r.position or 0))
        return [self._serializer.deserialize(record) for record in ordered]

    # ── Test helpers ─────────────────────────────────────────────

    @property
    def stored_events(self) -> list[StoredEvent]:
        return list(self._records)

    def clear(self) -> None:
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)
