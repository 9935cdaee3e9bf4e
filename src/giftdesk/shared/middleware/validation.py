"""Command validation ahead of the handler."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..ports.middleware import IMiddleware
from ..primitives.exceptions import ValidationError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ..ports.validation import IValidator

logger = logging.getLogger("giftdesk.middleware")


class ValidatorMiddleware(IMiddleware):
    """Rejects invalid commands before their handler runs.

    A rejected command raises :class:`ValidationError` carrying every field
    error. Nothing was recorded yet, so the unit of work rolls back with an
    empty batch.
    """

    def __init__(self, validator: IValidator) -> None:
        self._validator = validator

    async def __call__(
        self,
        message: Any,
        next_handler: Callable[[Any], Awaitable[Any]],
    ) -> Any:
        result = await self._validator.validate(message)
        if result.is_valid:
            return await next_handler(message)

        logger.info(
            "Rejected %s: %s",
            type(message).__name__,
            "; ".join(
                f"{field}: {', '.join(messages)}"
                for field, messages in result.errors.items()
            ),
        )
        raise ValidationError(result.errors)
