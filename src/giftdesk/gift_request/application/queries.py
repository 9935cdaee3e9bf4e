from __future__ import annotations

from ...shared.cqrs.query import Query
from .dto import GiftRequestSummary


class ListGiftRequests(Query[list[GiftRequestSummary]]):
    pending_only: bool = False
