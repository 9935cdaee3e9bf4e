"""Command validators of the gift attribution context."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ...shared.cqrs.mediator import get_current_uow
from ...shared.validation.result import ValidationResult
from .commands import AttributeGift

if TYPE_CHECKING:
    from ...shared.cqrs.command import Command
    from ..domain.ports import IGiftRepository, IResidentRepository


class GiftAvailabilityValidator:
    """Rejects an ``AttributeGift`` whose resident or gift is unknown, or
    whose gift has no stock left."""

    def __init__(self, residents: IResidentRepository, gifts: IGiftRepository) -> None:
        self._residents = residents
        self._gifts = gifts

    async def validate(self, command: Command[Any]) -> ValidationResult:
        if not isinstance(command, AttributeGift):
            return ValidationResult.success()

        uow = get_current_uow()
        result = ValidationResult.success()

        if await self._residents.get(command.resident_id, uow) is None:
            result.add_error("resident_id", "Resident not found")

        gift = await self._gifts.get(command.gift_id, uow)
        if gift is None:
            result.add_error("gift_id", "Gift not found")
        elif not gift.can_be_attributed:
            result.add_error("gift_id", f'Gift "{gift.name}" is out of stock')

        return result
