from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from support import GIFT_ID, RESIDENT_ID

from giftdesk.attribution.domain import GiftAttributed
from giftdesk.gift_request.domain import GiftRequestSubmitted
from giftdesk.security.domain import UserRegistered
from giftdesk.shared.adapters.memory import InMemoryEventStore
from giftdesk.shared.domain.event_registry import EventTypeRegistry
from giftdesk.shared.events import EventSerializer
from giftdesk.shared.ports.event_store import IEventStore, StoredEvent
from giftdesk.shared.primitives.exceptions import EventStoreError, UnknownEventTypeError

T0 = datetime(2024, 12, 24, 18, 30, tzinfo=timezone.utc)
PARIS = timezone(timedelta(hours=1))


def gift_attributed(aggregate_id: str = "attr-1", at: datetime = T0) -> GiftAttributed:
    return GiftAttributed(
        aggregate_id=aggregate_id,
        occurred_on=at,
        resident_id=RESIDENT_ID,
        resident_name="Alice Martin",
        resident_email="alice@example.com",
        gift_id=GIFT_ID,
        gift_name="Chocolate box",
        correlation_id="corr-1",
    )


@pytest.fixture()
def store(serializer: EventSerializer) -> InMemoryEventStore:
    return InMemoryEventStore(serializer, clock=lambda: T0 + timedelta(minutes=5))


@pytest.mark.parametrize(
    ("event", "type_name"),
    [
        (gift_attributed(), "gift.attributed"),
        (
            GiftRequestSubmitted(
                aggregate_id="req-1",
                occurred_on=T0.astimezone(PARIS),
                requester_name="Bob",
                requester_email="bob@example.com",
                requested_gift="Bicycle",
            ),
            "gift_request.submitted",
        ),
        (UserRegistered(aggregate_id="user-1", email="carol@example.com"), "user.registered"),
    ],
)
def test_serializer_round_trip_preserves_every_field(
    serializer: EventSerializer, event: object, type_name: str
) -> None:
    stored = serializer.serialize(event, recorded_at=T0)  # type: ignore[arg-type]

    assert stored.event_type == type_name
    assert isinstance(stored.payload["occurred_on"], str)
    assert serializer.deserialize(stored) == event


def test_serializer_normalises_timestamps_to_utc(serializer: EventSerializer) -> None:
    event = gift_attributed(at=T0.astimezone(PARIS))

    stored = serializer.serialize(event, recorded_at=T0)

    assert stored.occurred_on == T0
    assert stored.occurred_on.tzinfo == timezone.utc
    assert stored.payload["occurred_on"] == "2024-12-24T19:30:00+01:00"


def test_unknown_event_type_is_fatal(serializer: EventSerializer) -> None:
    stored = StoredEvent(
        event_id="e-1",
        event_type="gift.returned",
        aggregate_id="attr-1",
        occurred_on=T0,
        recorded_at=T0,
        payload={"aggregate_id": "attr-1"},
    )

    with pytest.raises(UnknownEventTypeError) as exc_info:
        serializer.deserialize(stored)

    assert exc_info.value.event_type == "gift.returned"


def test_invalid_payload_raises_event_store_error(serializer: EventSerializer) -> None:
    stored = serializer.serialize(gift_attributed(), recorded_at=T0)
    broken = StoredEvent(
        event_id=stored.event_id,
        event_type=stored.event_type,
        aggregate_id=stored.aggregate_id,
        occurred_on=stored.occurred_on,
        recorded_at=stored.recorded_at,
        payload={"aggregate_id": "attr-1"},
    )

    with pytest.raises(EventStoreError, match="not valid"):
        serializer.deserialize(broken)


def test_unregistered_class_cannot_be_serialised() -> None:
    serializer = EventSerializer(EventTypeRegistry())

    with pytest.raises(UnknownEventTypeError):
        serializer.serialize(gift_attributed(), recorded_at=T0)


def test_registry_rejects_conflicting_names() -> None:
    registry = EventTypeRegistry()
    registry.register("gift.attributed", GiftAttributed)
    registry.register("gift.attributed", GiftAttributed)

    with pytest.raises(ValueError, match="already registered"):
        registry.register("gift.attributed", UserRegistered)

    assert registry.list_registered() == ["gift.attributed"]
    assert registry.has("gift.attributed")
    assert not registry.has("user.registered")


def test_store_satisfies_the_port(store: InMemoryEventStore) -> None:
    assert isinstance(store, IEventStore)


@pytest.mark.asyncio()
async def test_events_for_aggregate_are_ordered_by_occurrence(
    store: InMemoryEventStore,
) -> None:
    later = gift_attributed("attr-1", T0 + timedelta(hours=1))
    earlier = gift_attributed("attr-1", T0)
    other = gift_attributed("attr-2", T0)

    await store.append(later)
    await store.append_all([other, earlier])

    assert await store.get_events_for_aggregate("attr-1") == [earlier, later]
    assert await store.get_events_for_aggregate("missing") == []


@pytest.mark.asyncio()
async def test_insertion_order_breaks_ties(store: InMemoryEventStore) -> None:
    first = gift_attributed("attr-1", T0)
    second = gift_attributed("attr-2", T0)

    await store.append_all([first, second])

    assert await store.get_all_events() == [first, second]
    assert [r.position for r in store.stored_events] == [1, 2]


@pytest.mark.asyncio()
async def test_events_by_type_accepts_name_or_class(store: InMemoryEventStore) -> None:
    attributed = gift_attributed()
    registered = UserRegistered(aggregate_id="user-1", email="carol@example.com")
    await store.append_all([attributed, registered])

    assert await store.get_events_by_type("user.registered") == [registered]
    assert await store.get_events_by_type(GiftAttributed) == [attributed]


@pytest.mark.asyncio()
async def test_records_carry_recording_time(store: InMemoryEventStore) -> None:
    await store.append(gift_attributed())

    [record] = store.stored_events
    assert record.recorded_at == T0 + timedelta(minutes=5)
    assert record.occurred_on == T0


@pytest.mark.asyncio()
async def test_batch_with_unknown_class_is_not_partially_written(
    store: InMemoryEventStore,
) -> None:
    class Unregistered(GiftAttributed):
        pass

    stray = Unregistered(**gift_attributed("attr-9").model_dump())

    with pytest.raises(UnknownEventTypeError):
        await store.append_all([gift_attributed(), stray])

    assert len(store) == 0
