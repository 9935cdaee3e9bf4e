from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ...shared.ports.unit_of_work import UnitOfWork
    from .model import GiftRequest


@runtime_checkable
class IGiftRequestRepository(Protocol):
    async def save(self, request: GiftRequest, uow: UnitOfWork | None = None) -> None: ...

    async def get(
        self, request_id: str, uow: UnitOfWork | None = None
    ) -> GiftRequest | None: ...

    async def list_all(self, uow: UnitOfWork | None = None) -> list[GiftRequest]: ...
