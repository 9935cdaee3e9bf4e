from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError
from support import make_attribution

from giftdesk.attribution.domain import Attribution, GiftAttributed
from giftdesk.shared.domain.aggregate import AggregateRoot, EventBuffer, EventSource
from giftdesk.shared.domain.events import DomainEvent


class Ticked(DomainEvent):
    tick: int


class Clock(AggregateRoot[str]):
    ticks: int = 0

    def tick(self) -> None:
        self.ticks += 1
        self._record_that(Ticked(aggregate_id=self.id, tick=self.ticks))


def test_event_buffer_drains_in_order_then_empty() -> None:
    buffer = EventBuffer()
    first = Ticked(aggregate_id="c", tick=1)
    second = Ticked(aggregate_id="c", tick=2)

    buffer.record(first)
    buffer.record(second)

    assert len(buffer) == 2
    assert buffer.drain() == [first, second]
    assert buffer.drain() == []
    assert not buffer


def test_pull_domain_events_returns_recorded_order_and_clears() -> None:
    clock = Clock(id="clock-1")
    for _ in range(3):
        clock.tick()

    assert clock.has_domain_events()
    events = clock.pull_domain_events()

    assert [e.tick for e in events] == [1, 2, 3]
    assert clock.pull_domain_events() == []
    assert not clock.has_domain_events()


def test_new_aggregate_has_no_events() -> None:
    clock = Clock(id="clock-1")
    assert not clock.has_domain_events()
    assert clock.pull_domain_events() == []


def test_buffers_are_not_shared_between_instances() -> None:
    a = Clock(id="a")
    b = Clock(id="b")
    a.tick()

    assert a.has_domain_events()
    assert not b.has_domain_events()


def test_aggregate_root_satisfies_event_source() -> None:
    assert isinstance(Clock(id="x"), EventSource)


def test_entities_compare_by_type_and_id() -> None:
    assert Clock(id="x", ticks=1) == Clock(id="x", ticks=5)
    assert Clock(id="x") != Clock(id="y")
    assert hash(Clock(id="x")) == hash(Clock(id="x"))


def test_event_rejects_blank_aggregate_id() -> None:
    with pytest.raises(ValidationError, match="aggregate_id must not be empty"):
        Ticked(aggregate_id="  ", tick=1)


def test_event_rejects_naive_timestamp() -> None:
    with pytest.raises(ValidationError):
        Ticked(aggregate_id="c", tick=1, occurred_on=datetime(2024, 1, 1))


def test_event_is_immutable() -> None:
    event = Ticked(aggregate_id="c", tick=1)
    with pytest.raises(ValidationError):
        event.tick = 2  # type: ignore[misc]


def test_event_name_is_class_name() -> None:
    assert Ticked(aggregate_id="c", tick=1).event_name == "Ticked"


def test_create_with_details_records_gift_attributed() -> None:
    at = datetime(2024, 12, 24, 18, 0, tzinfo=timezone(timedelta(hours=1)))
    attribution = make_attribution("attr-1", attributed_at=at)

    [event] = attribution.pull_domain_events()

    assert isinstance(event, GiftAttributed)
    assert event.attribution_id == "attr-1"
    assert event.attributed_at == at
    assert event.resident_name == "Alice Martin"
    assert event.gift_name == "Chocolate box"


def test_plain_create_records_nothing() -> None:
    attribution = Attribution.create("attr-2", "resident", "gift")
    assert not attribution.has_domain_events()


def test_attribution_rejects_blank_ids() -> None:
    with pytest.raises(ValidationError, match="Identifier cannot be empty"):
        Attribution.create("attr-3", " ", "gift")
