"""Mailer port."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class Attachment:
    filename: str
    content: bytes
    content_type: str = "text/plain"


@dataclass(frozen=True)
class EmailMessage:
    """Immutable outgoing e-mail."""

    recipient: str
    subject: str
    body_text: str
    sender: str | None = None
    attachments: tuple[Attachment, ...] = field(default_factory=tuple)


@runtime_checkable
class IMailer(Protocol):
    """
    Protocol for sending e-mails.

    Implementations: InMemoryMailer (tests), LoggingMailer (development).
    """

    async def send(self, message: EmailMessage) -> None:
        """Send *message* or raise."""
        ...
