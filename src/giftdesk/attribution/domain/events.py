"""Domain events of the gift attribution context."""

from __future__ import annotations

from datetime import datetime

from ...shared.domain.events import DomainEvent


class GiftAttributed(DomainEvent):
    """A gift was handed to a resident.

    Carries everything subscribers need (names, e-mail) so they never have to
    reload the resident or the gift.
    """

    resident_id: str
    resident_name: str
    resident_email: str
    gift_id: str
    gift_name: str

    @property
    def attribution_id(self) -> str:
        return self.aggregate_id

    @property
    def attributed_at(self) -> datetime:
        return self.occurred_on
