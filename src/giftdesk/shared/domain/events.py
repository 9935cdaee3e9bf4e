"""Domain Event base class."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, field_validator

from ..correlation import get_correlation_id


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DomainEvent(BaseModel):
    """Base class for all Domain Events.

    Events are immutable facts about an aggregate. Every event names the
    aggregate it belongs to and the instant it happened; both are validated
    at construction so a malformed event can never reach an aggregate buffer.

    Event types must be explicitly registered with an ``EventTypeRegistry``
    instance before they can be written to an event store.
    """

    model_config = ConfigDict(frozen=True)

    event_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    aggregate_id: str
    occurred_on: AwareDatetime = Field(default_factory=utc_now)
    correlation_id: str | None = Field(default_factory=get_correlation_id)

    @field_validator("aggregate_id")
    @classmethod
    def _aggregate_id_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("aggregate_id must not be empty")
        return value

    @property
    def event_name(self) -> str:
        return type(self).__name__
