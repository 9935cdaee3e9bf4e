"""Validator aggregation for the command pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .result import ValidationResult

if TYPE_CHECKING:
    from ..cqrs.command import Command
    from ..ports.validation import IValidator


class CompositeValidator:
    """Runs every applicable validator and reports all of their errors.

    A validator added with ``command_types`` only sees those commands (and
    their subclasses), so lookups such as the gift stock check do not run for
    unrelated commands. A validator added without them sees every command.
    """

    def __init__(self, validators: list[IValidator] | None = None) -> None:
        self._entries: list[tuple[IValidator, tuple[type[Any], ...]]] = [
            (validator, ()) for validator in validators or []
        ]

    def add(self, validator: IValidator, *command_types: type[Any]) -> None:
        self._entries.append((validator, command_types))

    def validators_for(self, command: Command[Any]) -> list[IValidator]:
        return [
            validator
            for validator, types in self._entries
            if not types or isinstance(command, types)
        ]

    async def validate(self, command: Command[Any]) -> ValidationResult:
        combined = ValidationResult.success()
        for validator in self.validators_for(command):
            combined = combined.merge(await validator.validate(command))
        return combined
