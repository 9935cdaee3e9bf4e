"""IEventPublisher: outbound port for committed domain events."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, Union, runtime_checkable

if TYPE_CHECKING:
    from ..domain.events import DomainEvent


@runtime_checkable
class IEventHandler(Protocol):
    """Object-style subscriber: anything with an ``handle(event)`` method."""

    def handle(self, event: Any) -> Any: ...


#: A subscriber is either an object with ``handle`` or a plain callable.
#: Both may be sync or async.
Subscriber = Union[IEventHandler, Callable[[Any], Union[Awaitable[None], None]]]


@dataclass(frozen=True)
class SubscriberFailure:
    """One subscriber that raised while reacting to one event."""

    event: DomainEvent
    subscriber: str
    error: BaseException


@dataclass
class PublicationReport:
    """Outcome of a publication: how many deliveries succeeded, which failed."""

    delivered: int = 0
    failures: list[SubscriberFailure] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.failures

    def merge(self, other: PublicationReport) -> PublicationReport:
        return PublicationReport(
            delivered=self.delivered + other.delivered,
            failures=[*self.failures, *other.failures],
        )


@runtime_checkable
class IEventPublisher(Protocol):
    """Delivers already-committed domain events to interested parties.

    Implementations isolate subscriber failures: one failing subscriber never
    prevents the others, or the following events, from being delivered.
    """

    async def publish(self, event: DomainEvent) -> PublicationReport:
        """Deliver one event."""
        ...

    async def publish_all(self, events: list[DomainEvent]) -> PublicationReport:
        """Deliver a batch, in order."""
        ...
