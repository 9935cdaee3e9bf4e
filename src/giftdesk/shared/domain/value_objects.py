"""Value objects shared by several bounded contexts."""

from __future__ import annotations

import re
import uuid

from pydantic import field_validator

from .value_object import SingleValueObject

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class Email(SingleValueObject):
    """E-mail address, trimmed and lower-cased."""

    value: str

    @field_validator("value")
    @classmethod
    def _normalise(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("Email cannot be empty")
        if not _EMAIL_PATTERN.match(value):
            raise ValueError(f'Invalid email format: "{value}"')
        return value

    @property
    def local_part(self) -> str:
        return self.value.split("@", 1)[0]

    @property
    def domain(self) -> str:
        return self.value.split("@", 1)[1]


class UuidIdentifier(SingleValueObject):
    """Identifier that must be a canonical UUID string."""

    value: str

    @field_validator("value")
    @classmethod
    def _must_be_uuid(cls, value: str) -> str:
        value = value.strip()
        try:
            uuid.UUID(value)
        except ValueError:
            raise ValueError(
                f'Invalid {cls.__name__} format: "{value}". Must be a valid UUID.'
            ) from None
        return value.lower()
