"""Response wrappers for command and query handlers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CommandResponse(Generic[T]):
    """Wrapper returned by command handlers.

    Handlers never return domain events: those stay in the aggregates until
    the unit of work commits and the harvester publishes them.
    """

    result: T
    success: bool = True
    correlation_id: str | None = None
    causation_id: str | None = None


@dataclass(frozen=True)
class QueryResponse(Generic[T]):
    """Wrapper returned by query handlers."""

    result: T
    success: bool = True
    correlation_id: str | None = None
    causation_id: str | None = None
