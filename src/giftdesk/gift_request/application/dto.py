from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

from ..domain.model import GiftRequestStatus

if TYPE_CHECKING:
    from ..domain.model import GiftRequest

_STATUS_LABELS = {
    GiftRequestStatus.PENDING: "Pending Review",
    GiftRequestStatus.APPROVED: "Approved",
    GiftRequestStatus.REJECTED: "Rejected",
}


@dataclass(frozen=True)
class GiftRequestSummary:
    """Dashboard view of a gift request."""

    id: str
    requester_name: str
    requester_email: str
    requested_gift: str
    motivation: str
    status: str
    status_label: str
    created_at: datetime
    days_pending: int

    @classmethod
    def from_entity(cls, request: GiftRequest, now: datetime) -> GiftRequestSummary:
        return cls(
            id=request.id,
            requester_name=request.requester_name,
            requester_email=request.requester_email.value,
            requested_gift=request.requested_gift,
            motivation=request.motivation,
            status=request.status.value,
            status_label=_STATUS_LABELS[request.status],
            created_at=request.created_at,
            days_pending=max(0, (now - request.created_at).days),
        )

    @property
    def is_pending(self) -> bool:
        return self.status == GiftRequestStatus.PENDING.value

    @property
    def urgency_level(self) -> str:
        if not self.is_pending:
            return "none"
        if self.days_pending > 14:
            return "critical"
        if self.days_pending > 7:
            return "high"
        if self.days_pending > 3:
            return "medium"
        return "low"

    @property
    def is_urgent(self) -> bool:
        return self.is_pending and self.days_pending > 7

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "requester": {"name": self.requester_name, "email": self.requester_email},
            "request": {"gift": self.requested_gift, "motivation": self.motivation},
            "status": {"code": self.status, "label": self.status_label},
            "timing": {
                "created_at": self.created_at.isoformat(),
                "days_pending": self.days_pending,
                "is_urgent": self.is_urgent,
                "urgency_level": self.urgency_level,
            },
        }
