"""Commands: requests to change state."""

from __future__ import annotations

import uuid
from typing import Generic

from pydantic import Field
from typing_extensions import TypeVar

from .message import Message

TResult = TypeVar("TResult", default=None)


class Command(Message, Generic[TResult]):
    """
    Base for all commands.

    Commands are named with imperative verbs (``AttributeGift``,
    ``RegisterUser``), run inside exactly one unit of work opened by the
    Mediator, and answer with a :class:`CommandResponse` whose
    ``causation_id`` is the ``command_id``.
    """

    command_id: str = Field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def message_id(self) -> str:
        return self.command_id
