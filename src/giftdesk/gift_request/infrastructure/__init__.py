from __future__ import annotations

from .memory import InMemoryGiftRequestRepository
from .models import GiftRequestModel
from .sqlalchemy_repositories import SQLAlchemyGiftRequestRepository

__all__ = [
    "GiftRequestModel",
    "InMemoryGiftRequestRepository",
    "SQLAlchemyGiftRequestRepository",
]
