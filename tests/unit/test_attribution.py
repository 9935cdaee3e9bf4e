from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError as PydanticValidationError
from support import (
    BOOK_ID,
    CHILD_ID,
    GIFT_ID,
    RESIDENT_ID,
    SENIOR_ID,
    TOY_ID,
    make_gift,
    make_resident,
    seed_town,
)

from giftdesk.attribution.application import (
    AttributeGift,
    AttributeGiftHandler,
    AttributionResult,
    CountResidentAttributions,
    GetResident,
    GetStatistics,
    GiftAttributionFailedError,
    ListGifts,
    ListResidents,
)
from giftdesk.attribution.domain import Attribution, GiftAttributed
from giftdesk.attribution.infrastructure import (
    InMemoryAttributionRepository,
    InMemoryGiftRepository,
    InMemoryResidentRepository,
)
from giftdesk.bootstrap import Application
from giftdesk.shared.adapters.memory import InMemoryMailer, InMemoryUnitOfWork
from giftdesk.shared.domain.pagination import Page, PerPage, SearchTerm
from giftdesk.shared.primitives.exceptions import OutOfStockError, ValidationError
from giftdesk.shared.primitives.id_generator import SequentialIdGenerator

FIRST_ID = "00000000-0000-4000-8000-000000000001"


@pytest.fixture()
async def town(app: Application) -> Application:
    await seed_town(app)
    return app


# --- Domain ---


def test_gift_stock_decreases_until_empty() -> None:
    gift = make_gift(quantity=1)

    gift.decrease_stock()

    assert gift.quantity == 0
    assert not gift.is_in_stock
    with pytest.raises(OutOfStockError, match="out of stock"):
        gift.decrease_stock()


@pytest.mark.parametrize(
    ("name", "message"),
    [("  ", "Gift name cannot be empty"), ("ab", "at least 3 characters"),
     ("x" * 101, "cannot exceed 100 characters")],
)
def test_gift_name_rules(name: str, message: str) -> None:
    with pytest.raises(PydanticValidationError, match=message):
        make_gift(name=name)


def test_gift_quantity_bounds() -> None:
    with pytest.raises(PydanticValidationError):
        make_gift(quantity=-1)
    with pytest.raises(PydanticValidationError):
        make_gift(quantity=1001)


def test_resident_name_and_groups() -> None:
    resident = make_resident(first_name=" Alice ", age=70)

    assert resident.full_name == "Alice Martin"
    assert resident.is_senior
    assert resident.is_adult
    with pytest.raises(PydanticValidationError, match="Last name cannot be empty"):
        make_resident(last_name="")


def test_plain_create_records_nothing() -> None:
    attribution = Attribution.create("attr-1", RESIDENT_ID, GIFT_ID)
    assert not attribution.has_domain_events()


# --- AttributeGift ---


@pytest.mark.asyncio()
async def test_attribute_gift_end_to_end(
    town: Application, mailer: InMemoryMailer
) -> None:
    response = await town.mediator.send(
        AttributeGift(resident_id=RESIDENT_ID, gift_id=GIFT_ID)
    )

    assert response.result == FIRST_ID
    gift = await town.repositories.gifts.get(GIFT_ID)
    assert gift.quantity == 4
    attribution = await town.repositories.attributions.get(FIRST_ID)
    assert attribution.resident_id == RESIDENT_ID
    assert not attribution.has_domain_events()

    [stored] = await town.event_store.get_events_for_aggregate(FIRST_ID)
    assert isinstance(stored, GiftAttributed)
    assert stored.resident_name == "Alice Martin"
    assert stored.correlation_id == response.correlation_id

    [notice] = mailer.sent_to("alice@example.com")
    assert notice.subject == "You received a gift!"
    assert town.task_queue.pending == 1

    assert await town.task_queue.drain() == 1
    certificate = mailer.sent_to("alice@example.com")[-1]
    assert certificate.subject == "Your gift certificate: Chocolate box"
    [attachment] = certificate.attachments
    assert attachment.filename == f"certificate-{FIRST_ID}.txt"
    assert b"GIFT CERTIFICATE" in attachment.content


@pytest.mark.asyncio()
async def test_attribute_gift_rejects_invalid_ids() -> None:
    with pytest.raises(PydanticValidationError, match="Invalid ResidentId format"):
        AttributeGift(resident_id="nope", gift_id=GIFT_ID)


@pytest.mark.asyncio()
async def test_unknown_resident_and_gift_fail_validation(town: Application) -> None:
    unknown = "99999999-9999-4999-8999-999999999999"

    with pytest.raises(ValidationError) as exc_info:
        await town.mediator.send(AttributeGift(resident_id=unknown, gift_id=unknown))

    assert exc_info.value.errors == {
        "resident_id": ["Resident not found"],
        "gift_id": ["Gift not found"],
    }
    assert await town.event_store.get_all_events() == []


@pytest.mark.asyncio()
async def test_out_of_stock_gift_fails_validation(
    town: Application, mailer: InMemoryMailer
) -> None:
    await town.mediator.send(AttributeGift(resident_id=RESIDENT_ID, gift_id=BOOK_ID))
    mailer.clear()

    with pytest.raises(ValidationError) as exc_info:
        await town.mediator.send(AttributeGift(resident_id=CHILD_ID, gift_id=BOOK_ID))

    assert exc_info.value.errors == {
        "gift_id": ['Gift "Big book of tales" is out of stock']
    }
    assert mailer.sent_messages == []
    assert len(await town.repositories.attributions.list_all()) == 1


@pytest.mark.asyncio()
async def test_handler_reports_stock_depleted_when_racing() -> None:
    residents = InMemoryResidentRepository()
    gifts = InMemoryGiftRepository()
    attributions = InMemoryAttributionRepository()
    await residents.save(make_resident())
    await gifts.save(make_gift(quantity=0))
    handler = AttributeGiftHandler(residents, gifts, attributions, SequentialIdGenerator())

    with pytest.raises(GiftAttributionFailedError) as exc_info:
        await handler.handle(AttributeGift(resident_id=RESIDENT_ID, gift_id=GIFT_ID))

    error = exc_info.value
    assert error.reason == "stock_depleted"
    assert error.context() == {
        "resident_id": RESIDENT_ID,
        "gift_id": GIFT_ID,
        "reason": "stock_depleted",
        "message": 'Gift attribution failed: "Chocolate box" is out of stock',
    }
    assert isinstance(error.__cause__, OutOfStockError)
    assert len(attributions) == 0


def test_failure_from_unexpected_exception() -> None:
    error = GiftAttributionFailedError.from_exception(
        RESIDENT_ID, GIFT_ID, RuntimeError("disk full")
    )
    assert error.reason == "unknown_error"
    assert str(error) == "Gift attribution failed: disk full"


@pytest.mark.asyncio()
async def test_mail_failure_still_schedules_certificate(
    town: Application, mailer: InMemoryMailer
) -> None:
    mailer.send = AsyncMock(side_effect=ConnectionError("smtp down"))  # type: ignore[method-assign]

    response = await town.mediator.send(
        AttributeGift(resident_id=RESIDENT_ID, gift_id=GIFT_ID)
    )

    assert response.result == FIRST_ID
    assert town.task_queue.pending == 1

    await town.task_queue.drain()

    # Certificate mail fails too: retried once, then dead-lettered.
    [letter] = town.task_queue.dead_letters
    assert letter.attempts == 2
    assert letter.task.attribution_id == FIRST_ID


# --- Queries ---


@pytest.mark.asyncio()
async def test_list_gifts(town: Application) -> None:
    await town.mediator.send(AttributeGift(resident_id=RESIDENT_ID, gift_id=BOOK_ID))

    every = (await town.mediator.query(ListGifts())).result
    in_stock = (await town.mediator.query(ListGifts(in_stock_only=True))).result

    assert {g.id for g in every} == {GIFT_ID, TOY_ID, BOOK_ID}
    assert {g.id for g in in_stock} == {GIFT_ID, TOY_ID}
    assert all(g.is_in_stock for g in in_stock)


@pytest.mark.asyncio()
async def test_list_residents_sorted_and_paginated(town: Application) -> None:
    page = (await town.mediator.query(ListResidents(page=1, per_page=2))).result

    assert [r.last_name for r in page.residents] == ["Bernard", "Dupont"]
    assert page.total == 3
    assert page.total_pages == 2
    assert page.has_next_page
    assert not page.has_previous_page

    second = (await town.mediator.query(ListResidents(page=2, per_page=2))).result
    assert [r.last_name for r in second.residents] == ["Martin"]
    assert not second.has_next_page


@pytest.mark.asyncio()
async def test_list_residents_search(town: Application) -> None:
    page = (await town.mediator.query(ListResidents(search="ROSE"))).result

    assert [r.full_name for r in page.residents] == ["Rose Dupont"]
    assert page.total == 1


def test_list_residents_bounds() -> None:
    with pytest.raises(PydanticValidationError):
        ListResidents(page=0)
    with pytest.raises(PydanticValidationError):
        ListResidents(per_page=101)


@pytest.mark.asyncio()
async def test_get_resident(town: Application) -> None:
    found = (await town.mediator.query(GetResident(resident_id=CHILD_ID))).result
    missing = (
        await town.mediator.query(
            GetResident(resident_id="99999999-9999-4999-8999-999999999999")
        )
    ).result

    assert found is not None
    assert found.full_name == "Leo Bernard"
    assert found.is_child
    assert found.email == "leo@example.com"
    assert missing is None


@pytest.mark.asyncio()
async def test_statistics(town: Application) -> None:
    await town.mediator.send(AttributeGift(resident_id=RESIDENT_ID, gift_id=GIFT_ID))

    stats = (await town.mediator.query(GetStatistics())).result

    assert stats.total_residents == 3
    assert stats.total_gifts == 3
    assert stats.total_attributions == 1
    assert (stats.children, stats.adults, stats.seniors) == (1, 1, 1)


@pytest.mark.asyncio()
async def test_count_resident_attributions_by_year(town: Application) -> None:
    await town.repositories.attributions.save(
        Attribution(
            id="old-1",
            resident_id=RESIDENT_ID,
            gift_id=GIFT_ID,
            attributed_at=datetime(2001, 12, 24, tzinfo=timezone.utc),
        )
    )
    await town.mediator.send(AttributeGift(resident_id=RESIDENT_ID, gift_id=GIFT_ID))
    this_year = datetime.now(timezone.utc).year

    current = await town.mediator.query(
        CountResidentAttributions(resident_id=RESIDENT_ID, year=this_year)
    )
    past = await town.mediator.query(
        CountResidentAttributions(resident_id=RESIDENT_ID, year=2001)
    )

    assert current.result == 1
    assert past.result == 1


# --- In-memory repositories ---


@pytest.mark.asyncio()
async def test_listings_register_what_they_return() -> None:
    residents = InMemoryResidentRepository()
    gifts = InMemoryGiftRepository()
    alice = make_resident()
    bob = make_resident(CHILD_ID, first_name="Bob", email="bob@example.com")
    await residents.save(alice)
    await residents.save(bob)
    chocolate = make_gift()
    await gifts.save(chocolate)
    await gifts.save(make_gift(TOY_ID, name="Empty toy box", quantity=0))
    uow = InMemoryUnitOfWork()

    page = await residents.search(SearchTerm("bob"), Page(), PerPage(), uow)
    in_stock = await gifts.list_in_stock(uow)

    assert page.items == [bob]
    assert in_stock == [chocolate]
    assert uow.managed_entities() == [bob, chocolate]


# --- AttributionResult ---


def test_attribution_result_to_dict() -> None:
    at = datetime(2024, 12, 24, 10, 0, tzinfo=timezone.utc)

    ok = AttributionResult.succeeded(RESIDENT_ID, "Alice Martin", GIFT_ID, "Chocolate box", at)
    failed = AttributionResult.failed(RESIDENT_ID, "No gifts available in stock", at)

    assert ok.to_dict() == {
        "success": True,
        "resident_id": RESIDENT_ID,
        "resident_name": "Alice Martin",
        "attributed_at": "2024-12-24T10:00:00+00:00",
        "gift_id": GIFT_ID,
        "gift_name": "Chocolate box",
        "error_message": None,
    }
    assert not failed.success
    assert failed.resident_name == "Unknown"
    assert failed.error_message == "No gifts available in stock"
