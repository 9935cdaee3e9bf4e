from __future__ import annotations

from ...shared.domain.events import DomainEvent


class UserRegistered(DomainEvent):
    email: str

    @property
    def user_id(self) -> str:
        return self.aggregate_id
