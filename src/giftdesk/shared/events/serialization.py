"""EventSerializer: DomainEvent <-> StoredEvent."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from ..ports.event_store import StoredEvent

if TYPE_CHECKING:
    from ..domain.event_registry import EventTypeRegistry
    from ..domain.events import DomainEvent


def as_utc(value: datetime) -> datetime:
    """Normalise *value* to UTC; naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class EventSerializer:
    """Turns events into storable records and back, through a type registry.

    The payload is ``model_dump(mode="json")`` of the whole event, so
    datetimes become ISO-8601 strings with their offset and the event can be
    rebuilt with ``model_validate`` without loss.
    """

    def __init__(self, registry: EventTypeRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> EventTypeRegistry:
        return self._registry

    def type_name(self, event_type: str | type[DomainEvent]) -> str:
        if isinstance(event_type, str):
            return event_type
        return self._registry.name_for(event_type)

    def serialize(
        self,
        event: DomainEvent,
        *,
        recorded_at: datetime,
        position: int | None = None,
    ) -> StoredEvent:
        return StoredEvent(
            event_id=event.event_id,
            event_type=self._registry.name_for(type(event)),
            aggregate_id=event.aggregate_id,
            occurred_on=as_utc(event.occurred_on),
            recorded_at=as_utc(recorded_at),
            payload=event.model_dump(mode="json"),
            position=position,
        )

    def deserialize(self, stored: StoredEvent) -> DomainEvent:
        return self._registry.hydrate(stored.event_type, stored.payload)
