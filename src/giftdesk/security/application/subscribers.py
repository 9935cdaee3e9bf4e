from __future__ import annotations

import logging

from ...shared.cqrs.handler import EventHandler
from ..domain.events import UserRegistered

logger = logging.getLogger(__name__)


class UserRegisteredSubscriber(EventHandler[UserRegistered]):
    async def handle(self, event: UserRegistered) -> None:
        logger.info(
            "User registered: %s <%s> at %s",
            event.user_id,
            event.email,
            event.occurred_on.isoformat(),
        )
