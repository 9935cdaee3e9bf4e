"""In-memory repositories of the gift attribution context."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...shared.adapters.memory.repository import InMemoryRepository
from ...shared.domain.pagination import PaginatedResult, Total
from ..domain.model import Attribution, Gift, Resident

if TYPE_CHECKING:
    from ...shared.domain.pagination import Page, PerPage, SearchTerm
    from ...shared.ports.unit_of_work import UnitOfWork


class InMemoryResidentRepository(InMemoryRepository[Resident]):
    async def find_by_email(
        self, email: str, uow: UnitOfWork | None = None
    ) -> Resident | None:
        wanted = email.strip().lower()
        for resident in self._store.values():
            if resident.email.value == wanted:
                return self._track([resident], uow)[0]
        return None

    async def search(
        self,
        term: SearchTerm,
        page: Page,
        per_page: PerPage,
        uow: UnitOfWork | None = None,
    ) -> PaginatedResult[Resident]:
        matches = [
            resident
            for resident in self._store.values()
            if term.matches(resident.first_name, resident.last_name, resident.email.value)
        ]
        matches.sort(key=lambda r: (r.last_name.lower(), r.first_name.lower()))
        start = page.offset(per_page)
        return PaginatedResult(
            items=self._track(matches[start : start + per_page.value], uow),
            page=page,
            per_page=per_page,
            total=Total(len(matches)),
        )


class InMemoryGiftRepository(InMemoryRepository[Gift]):
    async def find_by_name(self, name: str, uow: UnitOfWork | None = None) -> Gift | None:
        for gift in self._store.values():
            if gift.name == name:
                return self._track([gift], uow)[0]
        return None

    async def list_in_stock(self, uow: UnitOfWork | None = None) -> list[Gift]:
        return self._track(
            (gift for gift in self._store.values() if gift.is_in_stock), uow
        )


class InMemoryAttributionRepository(InMemoryRepository[Attribution]):
    async def count_for_resident_in_year(
        self,
        resident_id: str,
        year: int,
        uow: UnitOfWork | None = None,  # noqa: ARG002
    ) -> int:
        return sum(
            1
            for attribution in self._store.values()
            if attribution.resident_id == resident_id
            and attribution.attributed_at.year == year
        )
