"""Background work triggered by gift attributions."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from ...shared.ports.mailer import Attachment, EmailMessage
from ...shared.ports.task_queue import Task

if TYPE_CHECKING:
    from ...shared.ports.mailer import IMailer

logger = logging.getLogger("giftdesk.tasks")


class GenerateGiftCertificate(Task):
    """Render the certificate of one attribution and mail it to the resident."""

    attribution_id: str
    resident_name: str
    resident_email: str
    gift_name: str
    attributed_at: datetime


def render_certificate(task: GenerateGiftCertificate) -> str:
    rule = "=" * 48
    return "\n".join(
        [
            rule,
            "GIFT CERTIFICATE".center(48),
            rule,
            "",
            f"This certifies that {task.resident_name}",
            f'received the gift "{task.gift_name}"',
            f"on {task.attributed_at:%Y-%m-%d}.",
            "",
            f"Reference: {task.attribution_id}",
            rule,
        ]
    )


class GenerateGiftCertificateHandler:
    """Task handler for :class:`GenerateGiftCertificate`.

    Mailing failures propagate so the task queue retries the task.
    """

    def __init__(self, mailer: IMailer, sender: str | None = None) -> None:
        self._mailer = mailer
        self._sender = sender

    async def handle(self, task: GenerateGiftCertificate) -> None:
        certificate = render_certificate(task)
        message = EmailMessage(
            recipient=task.resident_email,
            subject=f"Your gift certificate: {task.gift_name}",
            body_text=(
                f"Hello {task.resident_name},\n\n"
                "Please find attached the certificate for your gift."
            ),
            sender=self._sender,
            attachments=(
                Attachment(
                    filename=f"certificate-{task.attribution_id}.txt",
                    content=certificate.encode("utf-8"),
                ),
            ),
        )
        try:
            await self._mailer.send(message)
        except Exception:
            logger.warning(
                "Could not send certificate %s to %s",
                task.attribution_id,
                task.resident_email,
            )
            raise
        logger.info("Certificate %s sent to %s", task.attribution_id, task.resident_email)
