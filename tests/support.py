"""Shared test doubles, ids and entity builders."""

from __future__ import annotations

from typing import Any

from giftdesk.attribution.domain import Age, Attribution, Gift, Resident
from giftdesk.shared.domain.events import DomainEvent
from giftdesk.shared.domain.value_objects import Email
from giftdesk.shared.ports.event_publisher import PublicationReport

RESIDENT_ID = "11111111-1111-4111-8111-111111111111"
CHILD_ID = "22222222-2222-4222-8222-222222222222"
SENIOR_ID = "33333333-3333-4333-8333-333333333333"
GIFT_ID = "aaaaaaaa-aaaa-4aaa-8aaa-aaaaaaaaaaaa"
TOY_ID = "bbbbbbbb-bbbb-4bbb-8bbb-bbbbbbbbbbbb"
BOOK_ID = "cccccccc-cccc-4ccc-8ccc-cccccccccccc"

TEST_JWT_SECRET = "test-secret-with-at-least-thirty-two-bytes!"


class RecordingPublisher:
    """Publisher double remembering every batch it was handed."""

    def __init__(self, *, fail_with: BaseException | None = None) -> None:
        self.batches: list[list[DomainEvent]] = []
        self.fail_with = fail_with

    @property
    def publish_all_calls(self) -> int:
        return len(self.batches)

    @property
    def published(self) -> list[DomainEvent]:
        return [event for batch in self.batches for event in batch]

    async def publish(self, event: DomainEvent) -> PublicationReport:
        return await self.publish_all([event])

    async def publish_all(self, events: list[DomainEvent]) -> PublicationReport:
        self.batches.append(list(events))
        if self.fail_with is not None:
            raise self.fail_with
        return PublicationReport(delivered=len(events))


def make_resident(
    resident_id: str = RESIDENT_ID,
    *,
    first_name: str = "Alice",
    last_name: str = "Martin",
    age: int = 34,
    email: str = "alice@example.com",
) -> Resident:
    return Resident(
        id=resident_id,
        first_name=first_name,
        last_name=last_name,
        age=Age(age),
        email=Email(email),
    )


def make_gift(
    gift_id: str = GIFT_ID,
    *,
    name: str = "Chocolate box",
    quantity: int = 5,
    description: str = "",
) -> Gift:
    return Gift(id=gift_id, name=name, quantity=quantity, description=description)


def make_attribution(attribution_id: str = "attr-1", **overrides: Any) -> Attribution:
    details: dict[str, Any] = {
        "resident_id": RESIDENT_ID,
        "resident_name": "Alice Martin",
        "resident_email": "alice@example.com",
        "gift_id": GIFT_ID,
        "gift_name": "Chocolate box",
    }
    details.update(overrides)
    return Attribution.create_with_details(attribution_id, **details)


async def seed_town(app: Any) -> None:
    """Three residents (adult, child, senior) and three gifts (plain, toy, book)."""
    residents = app.repositories.residents
    gifts = app.repositories.gifts
    async with app.uow_factory() as uow:
        await residents.save(make_resident(), uow)
        await residents.save(
            make_resident(
                CHILD_ID, first_name="Leo", last_name="Bernard", age=8, email="leo@example.com"
            ),
            uow,
        )
        await residents.save(
            make_resident(
                SENIOR_ID, first_name="Rose", last_name="Dupont", age=72, email="rose@example.com"
            ),
            uow,
        )
        await gifts.save(make_gift(GIFT_ID, name="Chocolate box", quantity=5), uow)
        await gifts.save(make_gift(TOY_ID, name="Wooden toy train", quantity=2), uow)
        await gifts.save(make_gift(BOOK_ID, name="Big book of tales", quantity=1), uow)
