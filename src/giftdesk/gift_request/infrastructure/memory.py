from __future__ import annotations

from ...shared.adapters.memory.repository import InMemoryRepository
from ..domain.model import GiftRequest


class InMemoryGiftRequestRepository(InMemoryRepository[GiftRequest]):
    pass
