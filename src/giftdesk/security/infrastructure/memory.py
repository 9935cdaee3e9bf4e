from __future__ import annotations

from typing import TYPE_CHECKING

from ...shared.adapters.memory.repository import InMemoryRepository
from ..domain.model import User

if TYPE_CHECKING:
    from ...shared.domain.value_objects import Email
    from ...shared.ports.unit_of_work import UnitOfWork


class InMemoryUserRepository(InMemoryRepository[User]):
    async def find_by_email(self, email: Email, uow: UnitOfWork | None = None) -> User | None:
        for user in self._store.values():
            if user.email == email:
                return self._track([user], uow)[0]
        return None

    async def email_exists(self, email: Email, uow: UnitOfWork | None = None) -> bool:  # noqa: ARG002
        return any(user.email == email for user in self._store.values())
