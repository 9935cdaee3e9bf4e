"""Shared kernel domain building blocks."""

from __future__ import annotations

# Absolute imports: import-graph checkers resolve relative ones in a
# package __init__ against the parent package.
from giftdesk.shared.domain.aggregate import (
    AggregateRoot,
    Entity,
    EventBuffer,
    EventSource,
)
from giftdesk.shared.domain.event_registry import EventTypeRegistry
from giftdesk.shared.domain.events import DomainEvent
from giftdesk.shared.domain.pagination import (
    PaginatedResult,
    Page,
    PerPage,
    SearchTerm,
    Total,
)
from giftdesk.shared.domain.value_object import SingleValueObject, ValueObject
from giftdesk.shared.domain.value_objects import Email, UuidIdentifier

__all__ = [
    "AggregateRoot",
    "DomainEvent",
    "Email",
    "Entity",
    "EventBuffer",
    "EventSource",
    "EventTypeRegistry",
    "Page",
    "PaginatedResult",
    "PerPage",
    "SearchTerm",
    "SingleValueObject",
    "Total",
    "UuidIdentifier",
    "ValueObject",
]
