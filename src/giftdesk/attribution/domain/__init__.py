"""Gift attribution domain: residents, gifts and attributions."""

from __future__ import annotations

from .events import GiftAttributed
from .model import Attribution, Gift, Resident
from .ports import IAttributionRepository, IGiftRepository, IResidentRepository
from .value_objects import Age, GiftId, ResidentId

__all__ = [
    "Age",
    "Attribution",
    "Gift",
    "GiftAttributed",
    "GiftId",
    "IAttributionRepository",
    "IGiftRepository",
    "IResidentRepository",
    "Resident",
    "ResidentId",
]
