from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..domain.model import User


@dataclass(frozen=True)
class UserDTO:
    id: str
    email: str
    roles: list[str]
    created_at: str
    last_login_at: str | None

    @classmethod
    def from_entity(cls, user: User) -> UserDTO:
        return cls(
            id=user.id,
            email=user.email.value,
            roles=list(user.roles),
            created_at=user.created_at.isoformat(),
            last_login_at=user.last_login_at.isoformat() if user.last_login_at else None,
        )


@dataclass(frozen=True)
class TokenDTO:
    token: str
    user_id: str
    email: str
    roles: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "token": self.token,
            "user": {"id": self.user_id, "email": self.email, "roles": list(self.roles)},
        }
