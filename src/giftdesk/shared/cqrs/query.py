"""Queries: read-only requests."""

from __future__ import annotations

import uuid
from typing import Generic

from pydantic import Field
from typing_extensions import TypeVar

from .message import Message

TResult = TypeVar("TResult", default=None)


class Query(Message, Generic[TResult]):
    """Base for all queries. Handlers read through a unit of work and never
    record events."""

    query_id: str = Field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def message_id(self) -> str:
        return self.query_id
