from __future__ import annotations

from ...shared.cqrs.command import Command


class SubmitGiftRequest(Command[str]):
    """Ask for a gift. Returns the id of the new request."""

    requester_name: str
    requester_email: str
    requester_phone: str = ""
    requested_gift: str
    motivation: str
