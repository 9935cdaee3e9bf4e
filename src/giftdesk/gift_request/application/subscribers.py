from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...shared.cqrs.handler import EventHandler
from ...shared.ports.mailer import EmailMessage
from ..domain.events import GiftRequestSubmitted

if TYPE_CHECKING:
    from ...shared.ports.mailer import IMailer

logger = logging.getLogger(__name__)


class GiftRequestSubmittedSubscriber(EventHandler[GiftRequestSubmitted]):
    """Logs the request and confirms it to the requester by e-mail.

    A mailer failure is logged and never raised: the request is already
    stored by the time this runs.
    """

    def __init__(self, mailer: IMailer, sender: str | None = None) -> None:
        self._mailer = mailer
        self._sender = sender

    async def handle(self, event: GiftRequestSubmitted) -> None:
        logger.info(
            "Gift request %s submitted by %s <%s> for %s",
            event.gift_request_id,
            event.requester_name,
            event.requester_email,
            event.requested_gift,
        )
        message = EmailMessage(
            recipient=event.requester_email,
            subject="Gift Request Confirmation",
            body_text=(
                f"Dear {event.requester_name},\n\n"
                "Thank you for submitting your gift request!\n\n"
                f"Request ID: {event.gift_request_id}\n"
                f"Requested gift: {event.requested_gift}\n"
                f"Submitted at: {event.submitted_at:%Y-%m-%d %H:%M:%S}\n\n"
                "We will review your request and get back to you soon."
            ),
            sender=self._sender,
        )
        try:
            await self._mailer.send(message)
        except Exception:
            logger.exception(
                "Failed to send confirmation e-mail for gift request %s",
                event.gift_request_id,
            )
            return
        logger.info("Confirmation e-mail sent to %s", event.requester_email)
