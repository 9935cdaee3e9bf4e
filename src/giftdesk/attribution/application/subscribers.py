"""Subscribers reacting to committed gift attributions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...shared.cqrs.handler import EventHandler
from ...shared.ports.mailer import EmailMessage
from ..domain.events import GiftAttributed
from .tasks import GenerateGiftCertificate

if TYPE_CHECKING:
    from ...shared.ports.mailer import IMailer
    from ...shared.ports.task_queue import ITaskQueue

logger = logging.getLogger(__name__)


class GiftAttributedSubscriber(EventHandler[GiftAttributed]):
    """Notifies the resident and schedules the certificate.

    The confirmation e-mail is best effort: a mailer failure is logged and
    the certificate is still scheduled.
    """

    def __init__(
        self, mailer: IMailer, task_queue: ITaskQueue, sender: str | None = None
    ) -> None:
        self._mailer = mailer
        self._task_queue = task_queue
        self._sender = sender

    async def handle(self, event: GiftAttributed) -> None:
        logger.info(
            "Gift %s attributed to %s <%s> (attribution %s)",
            event.gift_name,
            event.resident_name,
            event.resident_email,
            event.attribution_id,
        )

        try:
            await self._mailer.send(
                EmailMessage(
                    recipient=event.resident_email,
                    subject="You received a gift!",
                    body_text=(
                        f"Hello {event.resident_name},\n\n"
                        f'You have been attributed the gift "{event.gift_name}".'
                    ),
                    sender=self._sender,
                )
            )
        except Exception:
            logger.exception(
                "Failed to send attribution e-mail to %s", event.resident_email
            )

        await self._task_queue.enqueue(
            GenerateGiftCertificate(
                attribution_id=event.attribution_id,
                resident_name=event.resident_name,
                resident_email=event.resident_email,
                gift_name=event.gift_name,
                attributed_at=event.attributed_at,
                correlation_id=event.correlation_id,
            )
        )
