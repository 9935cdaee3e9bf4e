"""Mailer adapters for tests and development."""

from __future__ import annotations

import logging

from ...ports.mailer import EmailMessage, IMailer

logger = logging.getLogger(__name__)


class InMemoryMailer(IMailer):
    """
    Test double (Fake) that stores messages in a list for assertions.
    """

    def __init__(self) -> None:
        self.sent_messages: list[EmailMessage] = []

    async def send(self, message: EmailMessage) -> None:
        self.sent_messages.append(message)

    def sent_to(self, recipient: str) -> list[EmailMessage]:
        return [m for m in self.sent_messages if m.recipient == recipient]

    def assert_sent(self, recipient: str, count: int = 1) -> None:
        """Helper for test assertions."""
        matches = self.sent_to(recipient)
        if len(matches) != count:
            raise AssertionError(
                f"Expected {count} message(s) to {recipient}, found {len(matches)}"
            )

    def clear(self) -> None:
        self.sent_messages.clear()


class LoggingMailer(IMailer):
    """
    Development adapter that logs e-mails instead of sending them.
    """

    def __init__(self, default_sender: str | None = None) -> None:
        self.default_sender = default_sender

    async def send(self, message: EmailMessage) -> None:
        output = [
            "═" * 50,
            f"From:    {message.sender or self.default_sender or '(default)'}",
            f"To:      {message.recipient}",
            f"Subject: {message.subject}",
            f"Body:    {message.body_text}",
        ]
        if message.attachments:
            files = ", ".join(a.filename for a in message.attachments)
            output.append(f"Files:   {files}")
        output.append("═" * 50)
        logger.info("\n".join(output))
