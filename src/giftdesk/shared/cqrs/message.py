"""Common base of commands and queries."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..correlation import generate_correlation_id, get_correlation_id


class Message(BaseModel):
    """Frozen message carrying the correlation id of the flow it belongs to.

    The id is taken from the context when the message is built; a root
    message built outside any flow gets one from :meth:`ensure_correlation`
    at dispatch time.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    correlation_id: str | None = Field(default_factory=get_correlation_id)

    @property
    def message_id(self) -> str:
        raise NotImplementedError

    def ensure_correlation(self) -> Any:
        """This message, or a copy stamped with a fresh correlation id."""
        if self.correlation_id:
            return self
        return self.model_copy(update={"correlation_id": generate_correlation_id()})
