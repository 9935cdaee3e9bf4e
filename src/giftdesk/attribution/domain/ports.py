"""Repository ports of the gift attribution context."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ...shared.domain.pagination import Page, PaginatedResult, PerPage, SearchTerm
    from ...shared.ports.unit_of_work import UnitOfWork
    from .model import Attribution, Gift, Resident


@runtime_checkable
class IResidentRepository(Protocol):
    async def save(self, resident: Resident, uow: UnitOfWork | None = None) -> None: ...

    async def get(
        self, resident_id: str, uow: UnitOfWork | None = None
    ) -> Resident | None: ...

    async def find_by_email(
        self, email: str, uow: UnitOfWork | None = None
    ) -> Resident | None: ...

    async def list_all(self, uow: UnitOfWork | None = None) -> list[Resident]: ...

    async def search(
        self,
        term: SearchTerm,
        page: Page,
        per_page: PerPage,
        uow: UnitOfWork | None = None,
    ) -> PaginatedResult[Resident]:
        """Residents whose first name, last name or e-mail contains *term*."""
        ...


@runtime_checkable
class IGiftRepository(Protocol):
    async def save(self, gift: Gift, uow: UnitOfWork | None = None) -> None: ...

    async def get(self, gift_id: str, uow: UnitOfWork | None = None) -> Gift | None: ...

    async def find_by_name(
        self, name: str, uow: UnitOfWork | None = None
    ) -> Gift | None: ...

    async def list_all(self, uow: UnitOfWork | None = None) -> list[Gift]: ...

    async def list_in_stock(self, uow: UnitOfWork | None = None) -> list[Gift]: ...


@runtime_checkable
class IAttributionRepository(Protocol):
    async def save(
        self, attribution: Attribution, uow: UnitOfWork | None = None
    ) -> None: ...

    async def get(
        self, attribution_id: str, uow: UnitOfWork | None = None
    ) -> Attribution | None: ...

    async def list_all(self, uow: UnitOfWork | None = None) -> list[Attribution]: ...

    async def count_for_resident_in_year(
        self, resident_id: str, year: int, uow: UnitOfWork | None = None
    ) -> int: ...
