"""Queries of the gift attribution context."""

from __future__ import annotations

from pydantic import Field

from ...shared.cqrs.query import Query
from ...shared.domain.pagination import MAX_PER_PAGE
from .dto import GiftDTO, ResidentDTO, ResidentPage, StatisticsDTO


class ListGifts(Query[list[GiftDTO]]):
    in_stock_only: bool = False


class ListResidents(Query[ResidentPage]):
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=10, ge=1, le=MAX_PER_PAGE)
    search: str = ""


class GetResident(Query[ResidentDTO | None]):
    resident_id: str


class GetStatistics(Query[StatisticsDTO]):
    pass


class CountResidentAttributions(Query[int]):
    """Attributions a resident received during one calendar year."""

    resident_id: str
    year: int
