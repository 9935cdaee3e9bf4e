"""The GiftRequest aggregate."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import AwareDatetime, Field, ValidationInfo, field_validator

from ...shared.domain.aggregate import AggregateRoot
from ...shared.domain.events import utc_now
from ...shared.domain.value_objects import Email
from ...shared.primitives.exceptions import InvariantViolationError
from .events import GiftRequestSubmitted


class GiftRequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class GiftRequest(AggregateRoot[str]):
    """A request for a gift, reviewed by staff.

    New requests are ``pending``. Approving or rejecting a request that is
    already in that state is refused.
    """

    requester_name: str
    requester_email: Email
    requester_phone: str = ""
    requested_gift: str
    motivation: str
    status: GiftRequestStatus = GiftRequestStatus.PENDING
    created_at: AwareDatetime = Field(default_factory=utc_now)

    @field_validator("requester_name", "requested_gift", "motivation")
    @classmethod
    def _not_blank(cls, value: str, info: ValidationInfo) -> str:
        value = value.strip()
        if not value:
            label = (info.field_name or "value").replace("_", " ").capitalize()
            raise ValueError(f"{label} cannot be empty")
        return value

    @field_validator("requester_phone")
    @classmethod
    def _strip_phone(cls, value: str) -> str:
        return value.strip()

    @classmethod
    def create(
        cls,
        request_id: str,
        *,
        requester_name: str,
        requester_email: str,
        requester_phone: str = "",
        requested_gift: str,
        motivation: str,
        created_at: datetime | None = None,
    ) -> GiftRequest:
        """Build a pending request and record :class:`GiftRequestSubmitted`.

        Raises:
            pydantic.ValidationError: If a required text is blank or the
                e-mail is malformed.
        """
        request = cls(
            id=request_id,
            requester_name=requester_name,
            requester_email=Email(requester_email),
            requester_phone=requester_phone,
            requested_gift=requested_gift,
            motivation=motivation,
            created_at=created_at or utc_now(),
        )
        request._record_that(
            GiftRequestSubmitted(
                aggregate_id=request.id,
                occurred_on=request.created_at,
                requester_name=request.requester_name,
                requester_email=request.requester_email.value,
                requested_gift=request.requested_gift,
            )
        )
        return request

    @property
    def is_pending(self) -> bool:
        return self.status is GiftRequestStatus.PENDING

    def approve(self) -> None:
        if self.status is GiftRequestStatus.APPROVED:
            raise InvariantViolationError("Gift request is already approved")
        self.status = GiftRequestStatus.APPROVED

    def reject(self) -> None:
        if self.status is GiftRequestStatus.REJECTED:
            raise InvariantViolationError("Gift request is already rejected")
        self.status = GiftRequestStatus.REJECTED
