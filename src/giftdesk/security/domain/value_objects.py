from __future__ import annotations

from pydantic import field_validator

from ...shared.domain.value_object import SingleValueObject


class UserId(SingleValueObject):
    value: str

    @field_validator("value")
    @classmethod
    def _not_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("User ID cannot be empty")
        return value.strip()


class HashedPassword(SingleValueObject):
    """A password hash. Never holds the plain password."""

    value: str

    @field_validator("value")
    @classmethod
    def _not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("Password hash cannot be empty")
        return value

    def __repr__(self) -> str:
        return "HashedPassword('***')"
