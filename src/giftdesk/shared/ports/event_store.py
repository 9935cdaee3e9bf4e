"""IEventStore protocol + StoredEvent dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..domain.events import DomainEvent


def default_payload_factory() -> dict[str, Any]:
    return {}


@dataclass(frozen=True)
class StoredEvent:
    """Persistent representation of a domain event.

    - ``event_type``: discriminator registered in the ``EventTypeRegistry``.
    - ``payload``: JSON-compatible dump of every event field.
    - ``recorded_at``: when the store wrote the record (not when it happened).
    - ``position``: monotonic insertion index assigned by the store.

    Records are append-only: never updated, never deleted.
    """

    event_id: str
    event_type: str
    aggregate_id: str
    occurred_on: datetime
    recorded_at: datetime
    payload: dict[str, Any] = field(default_factory=default_payload_factory)
    position: int | None = None


@runtime_checkable
class IEventStore(Protocol):
    """Append-only audit log of published domain events.

    Reads rebuild the original events, ordered by ``occurred_on`` ascending
    with insertion position breaking ties.
    """

    async def append(self, event: DomainEvent) -> None:
        """Append a single event."""
        ...

    async def append_all(self, events: list[DomainEvent]) -> None:
        """Append a batch of events in one write."""
        ...

    async def get_events_for_aggregate(self, aggregate_id: str) -> list[DomainEvent]:
        """Return every event recorded for one aggregate."""
        ...

    async def get_events_by_type(
        self, event_type: str | type[DomainEvent]
    ) -> list[DomainEvent]:
        """Return every event of one registered type (name or class)."""
        ...

    async def get_all_events(self) -> list[DomainEvent]:
        """Return every stored event."""
        ...
