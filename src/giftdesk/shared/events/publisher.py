"""Event publishers: in-process subscriber dispatch and the storing decorator."""

from __future__ import annotations

import logging
from inspect import isawaitable
from typing import TYPE_CHECKING

from ..ports.event_publisher import (
    IEventPublisher,
    PublicationReport,
    SubscriberFailure,
)

if TYPE_CHECKING:
    from ..domain.events import DomainEvent
    from ..ports.event_publisher import Subscriber
    from ..ports.event_store import IEventStore

logger = logging.getLogger("giftdesk.events")


def subscriber_name(subscriber: Subscriber) -> str:
    name = getattr(subscriber, "__qualname__", None)
    return name if isinstance(name, str) else type(subscriber).__name__


class InProcessEventPublisher(IEventPublisher):
    """Delivers events to subscribers registered in this process.

    Subscribers are keyed by the **concrete** event class and run one after
    the other in registration order. A subscriber that raises is logged and
    recorded in the returned :class:`PublicationReport`; delivery carries on
    with the next subscriber and the next event.
    """

    def __init__(self) -> None:
        self._subscribers: dict[type[DomainEvent], list[Subscriber]] = {}

    # ── Registration ─────────────────────────────────────────────

    def subscribe(self, event_type: type[DomainEvent], subscriber: Subscriber) -> None:
        """Register *subscriber* for *event_type*."""
        subscribers = self._subscribers.setdefault(event_type, [])
        if subscriber not in subscribers:
            subscribers.append(subscriber)
            logger.debug(
                "Subscribed %s to %s", subscriber_name(subscriber), event_type.__name__
            )

    def subscribers_for(self, event_type: type[DomainEvent]) -> list[Subscriber]:
        return list(self._subscribers.get(event_type, []))

    # ── Publishing ───────────────────────────────────────────────

    async def publish(self, event: DomainEvent) -> PublicationReport:
        report = PublicationReport()
        for subscriber in self.subscribers_for(type(event)):
            try:
                await self._invoke(subscriber, event)
            except Exception as exc:
                logger.exception(
                    "Subscriber %s failed for %s (event_id=%s, aggregate_id=%s)",
                    subscriber_name(subscriber),
                    type(event).__name__,
                    event.event_id,
                    event.aggregate_id,
                )
                report.failures.append(
                    SubscriberFailure(
                        event=event,
                        subscriber=subscriber_name(subscriber),
                        error=exc,
                    )
                )
            else:
                report.delivered += 1
        return report

    async def publish_all(self, events: list[DomainEvent]) -> PublicationReport:
        report = PublicationReport()
        for event in events:
            report = report.merge(await self.publish(event))
        if report.failures:
            logger.warning(
                "Published %d event(s) with %d subscriber failure(s)",
                len(events),
                len(report.failures),
            )
        return report

    async def _invoke(self, subscriber: Subscriber, event: DomainEvent) -> None:
        handle = getattr(subscriber, "handle", None)
        if callable(handle):
            result = handle(event)
        elif callable(subscriber):
            result = subscriber(event)
        else:
            raise TypeError("Subscriber must be a callable or have a handle() method")

        if isawaitable(result):
            await result

    # ── Introspection ────────────────────────────────────────────

    def get_registered_subscribers(
        self,
    ) -> dict[type[DomainEvent], list[Subscriber]]:
        """Return all registered subscribers (debugging utility)."""
        return {k: list(v) for k, v in self._subscribers.items()}

    def clear(self) -> None:
        """Remove all subscriptions (testing utility)."""
        self._subscribers.clear()


class StoringEventPublisher(IEventPublisher):
    """Appends events to an :class:`IEventStore` before delegating delivery.

    The store is an audit trail: when it fails the error is logged and the
    events are still handed to the wrapped publisher.
    """

    def __init__(self, inner: IEventPublisher, store: IEventStore) -> None:
        self._inner = inner
        self._store = store

    async def publish(self, event: DomainEvent) -> PublicationReport:
        try:
            await self._store.append(event)
        except Exception:
            logger.exception(
                "Failed to store %s (event_id=%s)", type(event).__name__, event.event_id
            )
        return await self._inner.publish(event)

    async def publish_all(self, events: list[DomainEvent]) -> PublicationReport:
        try:
            await self._store.append_all(events)
        except Exception:
            logger.exception("Failed to store a batch of %d event(s)", len(events))
        return await self._inner.publish_all(events)
