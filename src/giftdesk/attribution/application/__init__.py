"""Use cases of the gift attribution context."""

from __future__ import annotations

from .commands import AttributeGift
from .dto import AttributionResult, GiftDTO, ResidentDTO, ResidentPage, StatisticsDTO
from .exceptions import GiftAttributionFailedError, NoEligibleGiftError
from .handlers import (
    AttributeGiftHandler,
    CountResidentAttributionsHandler,
    GetResidentHandler,
    GetStatisticsHandler,
    ListGiftsHandler,
    ListResidentsHandler,
)
from .queries import (
    CountResidentAttributions,
    GetResident,
    GetStatistics,
    ListGifts,
    ListResidents,
)
from .service import AutomaticGiftAttributionService, select_best_gift
from .subscribers import GiftAttributedSubscriber
from .tasks import GenerateGiftCertificate, GenerateGiftCertificateHandler
from .validators import GiftAvailabilityValidator

__all__ = [
    "AttributeGift",
    "AttributeGiftHandler",
    "AttributionResult",
    "AutomaticGiftAttributionService",
    "CountResidentAttributions",
    "CountResidentAttributionsHandler",
    "GenerateGiftCertificate",
    "GenerateGiftCertificateHandler",
    "GetResident",
    "GetResidentHandler",
    "GetStatistics",
    "GetStatisticsHandler",
    "GiftAttributedSubscriber",
    "GiftAttributionFailedError",
    "GiftAvailabilityValidator",
    "GiftDTO",
    "ListGifts",
    "ListGiftsHandler",
    "ListResidents",
    "ListResidentsHandler",
    "NoEligibleGiftError",
    "ResidentDTO",
    "ResidentPage",
    "StatisticsDTO",
    "select_best_gift",
]
