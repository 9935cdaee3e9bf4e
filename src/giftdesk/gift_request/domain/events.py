from __future__ import annotations

from datetime import datetime

from ...shared.domain.events import DomainEvent


class GiftRequestSubmitted(DomainEvent):
    """Someone asked for a gift; the request is waiting for review."""

    requester_name: str
    requester_email: str
    requested_gift: str

    @property
    def gift_request_id(self) -> str:
        return self.aggregate_id

    @property
    def submitted_at(self) -> datetime:
        return self.occurred_on
