"""Persistence adapters of the gift attribution context."""

from __future__ import annotations

from .memory import (
    InMemoryAttributionRepository,
    InMemoryGiftRepository,
    InMemoryResidentRepository,
)
from .models import AttributionModel, GiftModel, ResidentModel
from .sqlalchemy_repositories import (
    SQLAlchemyAttributionRepository,
    SQLAlchemyGiftRepository,
    SQLAlchemyResidentRepository,
)

__all__ = [
    "AttributionModel",
    "GiftModel",
    "InMemoryAttributionRepository",
    "InMemoryGiftRepository",
    "InMemoryResidentRepository",
    "ResidentModel",
    "SQLAlchemyAttributionRepository",
    "SQLAlchemyGiftRepository",
    "SQLAlchemyResidentRepository",
]
