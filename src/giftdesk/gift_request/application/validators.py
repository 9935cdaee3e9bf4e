"""Input rules for gift request submission."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from ...shared.domain.value_objects import Email
from ...shared.validation.result import ValidationResult
from .commands import SubmitGiftRequest

if TYPE_CHECKING:
    from ...shared.cqrs.command import Command

NAME_MAX_LENGTH = 100
GIFT_MAX_LENGTH = 255
MOTIVATION_MIN_LENGTH = 10
MOTIVATION_MAX_LENGTH = 1000

_PHONE_PATTERN = re.compile(r"^\+?[0-9][0-9 .\-()]{5,19}$")


class GiftRequestValidator:
    """Collects every problem of a ``SubmitGiftRequest`` at once."""

    async def validate(self, command: Command[Any]) -> ValidationResult:
        if not isinstance(command, SubmitGiftRequest):
            return ValidationResult.success()

        result = ValidationResult.success()

        name = command.requester_name.strip()
        if not name:
            result.add_error("requester_name", "Requester name cannot be empty")
        elif len(name) > NAME_MAX_LENGTH:
            result.add_error(
                "requester_name",
                f"Requester name cannot exceed {NAME_MAX_LENGTH} characters",
            )

        try:
            Email(command.requester_email)
        except ValueError:
            result.add_error("requester_email", "Invalid email address")

        phone = command.requester_phone.strip()
        if phone and not _PHONE_PATTERN.match(phone):
            result.add_error("requester_phone", "Invalid phone number")

        gift = command.requested_gift.strip()
        if not gift:
            result.add_error("requested_gift", "Requested gift cannot be empty")
        elif len(gift) > GIFT_MAX_LENGTH:
            result.add_error(
                "requested_gift",
                f"Requested gift cannot exceed {GIFT_MAX_LENGTH} characters",
            )

        motivation = command.motivation.strip()
        if len(motivation) < MOTIVATION_MIN_LENGTH:
            result.add_error(
                "motivation",
                f"Motivation must be at least {MOTIVATION_MIN_LENGTH} characters",
            )
        elif len(motivation) > MOTIVATION_MAX_LENGTH:
            result.add_error(
                "motivation",
                f"Motivation cannot exceed {MOTIVATION_MAX_LENGTH} characters",
            )

        return result
