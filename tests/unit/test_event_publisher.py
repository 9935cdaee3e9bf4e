from __future__ import annotations

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from giftdesk.shared.adapters.memory import InMemoryEventStore
from giftdesk.shared.domain.event_registry import EventTypeRegistry
from giftdesk.shared.domain.events import DomainEvent
from giftdesk.shared.events import (
    EventSerializer,
    InProcessEventPublisher,
    StoringEventPublisher,
)
from giftdesk.shared.ports.event_publisher import IEventPublisher, PublicationReport


class Opened(DomainEvent):
    pass


class Closed(DomainEvent):
    pass


class SubOpened(Opened):
    pass


@pytest.fixture()
def store() -> InMemoryEventStore:
    registry = EventTypeRegistry()
    registry.register("test.opened", Opened)
    registry.register("test.closed", Closed)
    return InMemoryEventStore(EventSerializer(registry))


@pytest.mark.asyncio()
async def test_async_handler_object_receives_event() -> None:
    publisher = InProcessEventPublisher()
    handler = MagicMock()
    handler.handle = AsyncMock()
    publisher.subscribe(Opened, handler)

    event = Opened(aggregate_id="door-1")
    report = await publisher.publish(event)

    handler.handle.assert_awaited_once_with(event)
    assert report.delivered == 1
    assert report.succeeded


@pytest.mark.asyncio()
async def test_sync_and_async_callables_are_supported() -> None:
    publisher = InProcessEventPublisher()
    seen: list[str] = []

    def sync_subscriber(event: DomainEvent) -> None:
        seen.append(f"sync:{event.aggregate_id}")

    async def async_subscriber(event: DomainEvent) -> None:
        seen.append(f"async:{event.aggregate_id}")

    publisher.subscribe(Opened, sync_subscriber)
    publisher.subscribe(Opened, async_subscriber)

    await publisher.publish(Opened(aggregate_id="d"))

    assert seen == ["sync:d", "async:d"]


@pytest.mark.asyncio()
async def test_failing_subscriber_does_not_block_others(
    caplog: pytest.LogCaptureFixture,
) -> None:
    publisher = InProcessEventPublisher()
    seen: list[str] = []

    async def broken(event: DomainEvent) -> None:
        raise RuntimeError(f"cannot handle {event.aggregate_id}")

    async def healthy(event: DomainEvent) -> None:
        seen.append(event.aggregate_id)

    publisher.subscribe(Opened, broken)
    publisher.subscribe(Opened, healthy)
    publisher.subscribe(Closed, healthy)

    with caplog.at_level(logging.ERROR, logger="giftdesk.events"):
        report = await publisher.publish_all(
            [Opened(aggregate_id="e"), Closed(aggregate_id="f")]
        )

    assert seen == ["e", "f"]
    assert report.delivered == 2
    assert not report.succeeded
    [failure] = report.failures
    assert failure.event.aggregate_id == "e"
    assert "broken" in failure.subscriber
    assert isinstance(failure.error, RuntimeError)
    assert "Subscriber" in caplog.text


@pytest.mark.asyncio()
async def test_dispatch_uses_concrete_event_class() -> None:
    publisher = InProcessEventPublisher()
    seen: list[str] = []
    publisher.subscribe(Opened, lambda e: seen.append(e.event_name))

    await publisher.publish(SubOpened(aggregate_id="x"))
    await publisher.publish(Opened(aggregate_id="x"))

    assert seen == ["Opened"]


@pytest.mark.asyncio()
async def test_event_without_subscribers_is_a_noop() -> None:
    report = await InProcessEventPublisher().publish(Closed(aggregate_id="x"))
    assert report == PublicationReport()


def test_subscribe_ignores_duplicates() -> None:
    publisher = InProcessEventPublisher()

    def subscriber(event: DomainEvent) -> None:
        return None

    publisher.subscribe(Opened, subscriber)
    publisher.subscribe(Opened, subscriber)

    assert publisher.subscribers_for(Opened) == [subscriber]
    publisher.clear()
    assert publisher.get_registered_subscribers() == {}


@pytest.mark.asyncio()
async def test_subscriber_that_is_not_callable_is_reported() -> None:
    publisher = InProcessEventPublisher()
    publisher.subscribe(Opened, object())  # type: ignore[arg-type]

    report = await publisher.publish(Opened(aggregate_id="x"))

    assert isinstance(report.failures[0].error, TypeError)


def test_publishers_satisfy_the_port(store: InMemoryEventStore) -> None:
    inner = InProcessEventPublisher()
    assert isinstance(inner, IEventPublisher)
    assert isinstance(StoringEventPublisher(inner, store), IEventPublisher)


@pytest.mark.asyncio()
async def test_storing_publisher_appends_then_delivers(
    store: InMemoryEventStore,
) -> None:
    inner = InProcessEventPublisher()
    delivered: list[str] = []
    inner.subscribe(Opened, lambda e: delivered.append(e.aggregate_id))
    publisher = StoringEventPublisher(inner, store)

    await publisher.publish_all([Opened(aggregate_id="a"), Closed(aggregate_id="b")])

    assert delivered == ["a"]
    assert len(store) == 2
    assert [e.aggregate_id for e in await store.get_all_events()] == ["a", "b"]


@pytest.mark.asyncio()
async def test_storing_publisher_still_delivers_when_store_fails(
    caplog: pytest.LogCaptureFixture,
) -> None:
    broken_store = MagicMock()
    broken_store.append_all = AsyncMock(side_effect=OSError("disk full"))
    inner = InProcessEventPublisher()
    delivered: list[str] = []
    inner.subscribe(Opened, lambda e: delivered.append(e.aggregate_id))

    with caplog.at_level(logging.ERROR, logger="giftdesk.events"):
        report = await StoringEventPublisher(inner, broken_store).publish_all(
            [Opened(aggregate_id="a")]
        )

    assert delivered == ["a"]
    assert report.delivered == 1
    assert "Failed to store" in caplog.text


def test_report_merge_adds_up() -> None:
    left = PublicationReport(delivered=2)
    right = PublicationReport(delivered=1)

    merged = left.merge(right)

    assert merged.delivered == 3
    assert merged.succeeded
