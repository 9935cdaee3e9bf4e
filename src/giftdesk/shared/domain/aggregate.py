"""Entity and Aggregate Root base classes with an in-memory event buffer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, Protocol, TypeVar, runtime_checkable
from uuid import UUID

from pydantic import BaseModel, ConfigDict, PrivateAttr

if TYPE_CHECKING:
    from .events import DomainEvent

ID = TypeVar("ID", str, int, UUID)


class EventBuffer:
    """Ordered, drainable list of events recorded by one aggregate.

    The buffer only grows through :meth:`record` and only shrinks through
    :meth:`drain`, which hands out everything in recording order and leaves
    the buffer empty.
    """

    __slots__ = ("_events",)

    def __init__(self) -> None:
        self._events: list[DomainEvent] = []

    def record(self, event: DomainEvent) -> None:
        self._events.append(event)

    def drain(self) -> list[DomainEvent]:
        events, self._events = self._events, []
        return events

    def __len__(self) -> int:
        return len(self._events)

    def __bool__(self) -> bool:
        return bool(self._events)


@runtime_checkable
class EventSource(Protocol):
    """Structural capability: anything that can hand over pending domain events.

    The post-commit harvester looks for this shape on every entity the unit of
    work manages, so aggregates need no registration beyond being saved.
    """

    def pull_domain_events(self) -> list[DomainEvent]: ...

    def has_domain_events(self) -> bool: ...


class Entity(BaseModel, Generic[ID]):
    """Base class for identity-bearing domain objects.

    Two entities are equal when they are of the same class and share an id,
    whatever their other attributes.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    id: ID

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return bool(self.id == other.id)

    def __hash__(self) -> int:
        return hash((self.__class__.__name__, self.id))


class AggregateRoot(Entity[ID], Generic[ID]):
    """Base class for all Aggregate Roots.

    Business methods record what happened through :meth:`_record_that`; the
    persistence layer drains the events with :meth:`pull_domain_events` once
    the transaction that saved the aggregate has committed.

    Usage::

        class Attribution(AggregateRoot[str]):
            @classmethod
            def create_with_details(cls, ...) -> Attribution:
                attribution = cls(id=..., ...)
                attribution._record_that(GiftAttributed(...))
                return attribution
    """

    _events: EventBuffer = PrivateAttr(default_factory=EventBuffer)

    def _record_that(self, event: DomainEvent) -> None:
        """Record a domain event to be published after commit."""
        self._events.record(event)

    def pull_domain_events(self) -> list[DomainEvent]:
        """Return all recorded events in order and clear the buffer."""
        return self._events.drain()

    def has_domain_events(self) -> bool:
        return bool(self._events)


__all__ = ["ID", "AggregateRoot", "Entity", "EventBuffer", "EventSource"]
