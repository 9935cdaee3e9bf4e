from __future__ import annotations

from .events import GiftRequestSubmitted
from .model import GiftRequest, GiftRequestStatus
from .ports import IGiftRequestRepository

__all__ = [
    "GiftRequest",
    "GiftRequestStatus",
    "GiftRequestSubmitted",
    "IGiftRequestRepository",
]
