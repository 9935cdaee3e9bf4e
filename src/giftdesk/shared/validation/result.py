"""Field-level validation outcome shared by every command validator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ValidationResult:
    """Error messages grouped by field name; valid when there are none.

    Validators start from :meth:`success` and call :meth:`add_error`, or
    return :meth:`failure` directly::

        result = ValidationResult.success()
        if gift.quantity == 0:
            result.add_error("gift_id", f'Gift "{gift.name}" is out of stock')
    """

    errors: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def success(cls) -> ValidationResult:
        return cls()

    @classmethod
    def failure(cls, errors: dict[str, list[str]]) -> ValidationResult:
        return cls(errors={name: list(messages) for name, messages in errors.items()})

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add_error(self, field_name: str, message: str) -> None:
        self.errors.setdefault(field_name, []).append(message)

    def messages_for(self, field_name: str) -> list[str]:
        return list(self.errors.get(field_name, []))

    def merge(self, other: ValidationResult) -> ValidationResult:
        """A new result holding the errors of both; neither input changes."""
        combined = ValidationResult.failure(self.errors)
        for field_name, messages in other.errors.items():
            combined.errors.setdefault(field_name, []).extend(messages)
        return combined

    def to_dict(self) -> dict[str, Any]:
        return {"valid": self.is_valid, "errors": self.failure(self.errors).errors}

    def __bool__(self) -> bool:
        return self.is_valid
