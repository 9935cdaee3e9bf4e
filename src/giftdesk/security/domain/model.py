"""The User aggregate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import AwareDatetime, Field

from ...shared.domain.aggregate import AggregateRoot
from ...shared.domain.events import utc_now
from ...shared.domain.value_objects import Email
from .events import UserRegistered
from .value_objects import HashedPassword, UserId

if TYPE_CHECKING:
    from .ports import IPasswordHasher

DEFAULT_ROLES = ("ROLE_USER",)


class User(AggregateRoot[str]):
    """An account able to log in and receive tokens."""

    email: Email
    password: HashedPassword
    roles: list[str] = Field(default_factory=lambda: list(DEFAULT_ROLES))
    created_at: AwareDatetime = Field(default_factory=utc_now)
    last_login_at: AwareDatetime | None = None

    @classmethod
    def register(
        cls,
        user_id: UserId,
        email: Email,
        password: HashedPassword,
        roles: list[str] | None = None,
    ) -> User:
        """Create an account and record :class:`UserRegistered`."""
        user = cls(
            id=user_id.value,
            email=email,
            password=password,
            roles=list(roles) if roles else list(DEFAULT_ROLES),
        )
        user._record_that(
            UserRegistered(
                aggregate_id=user.id,
                occurred_on=user.created_at,
                email=user.email.value,
            )
        )
        return user

    @property
    def user_id(self) -> UserId:
        return UserId(self.id)

    def record_login(self) -> None:
        self.last_login_at = utc_now()

    def verify_password(self, plain_password: str, hasher: IPasswordHasher) -> bool:
        return hasher.verify(self.password.value, plain_password)

    def has_role(self, role: str) -> bool:
        return role in self.roles
