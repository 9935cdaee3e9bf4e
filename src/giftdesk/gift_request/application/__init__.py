from __future__ import annotations

from .commands import SubmitGiftRequest
from .dto import GiftRequestSummary
from .handlers import ListGiftRequestsHandler, SubmitGiftRequestHandler
from .queries import ListGiftRequests
from .subscribers import GiftRequestSubmittedSubscriber
from .validators import GiftRequestValidator

__all__ = [
    "GiftRequestSubmittedSubscriber",
    "GiftRequestSummary",
    "GiftRequestValidator",
    "ListGiftRequests",
    "ListGiftRequestsHandler",
    "SubmitGiftRequest",
    "SubmitGiftRequestHandler",
]
