"""Ports of the security context."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ...shared.domain.value_objects import Email
    from ...shared.ports.unit_of_work import UnitOfWork
    from .model import User


@dataclass(frozen=True)
class TokenClaims:
    """What a valid access token says about its bearer."""

    user_id: str
    email: str
    roles: list[str] = field(default_factory=list)


@runtime_checkable
class IUserRepository(Protocol):
    async def save(self, user: User, uow: UnitOfWork | None = None) -> None: ...

    async def get(self, user_id: str, uow: UnitOfWork | None = None) -> User | None: ...

    async def find_by_email(
        self, email: Email, uow: UnitOfWork | None = None
    ) -> User | None: ...

    async def email_exists(self, email: Email, uow: UnitOfWork | None = None) -> bool: ...


@runtime_checkable
class IPasswordHasher(Protocol):
    def hash(self, plain_password: str) -> str: ...

    def verify(self, hashed_password: str, plain_password: str) -> bool: ...


@runtime_checkable
class ITokenGenerator(Protocol):
    def generate_token(self, user: User) -> str:
        """Issue a signed access token for *user*."""
        ...

    def parse_token(self, token: str) -> TokenClaims | None:
        """Claims of a valid token, or ``None`` when it is invalid or expired."""
        ...
