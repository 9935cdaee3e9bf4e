"""Primitives shared by every layer: exceptions and identity generation."""

from __future__ import annotations

from .exceptions import (
    DomainError,
    EntityNotFoundError,
    EventHarvestError,
    EventPublicationError,
    EventStoreError,
    GiftDeskError,
    HandlerError,
    HandlerNotFoundError,
    HandlerRegistrationError,
    InfrastructureError,
    InvariantViolationError,
    NotFoundError,
    OutOfStockError,
    PersistenceError,
    SessionManagementError,
    UnitOfWorkError,
    UnknownEventTypeError,
    ValidationError,
)
from .id_generator import IIDGenerator, SequentialIdGenerator, UUID4Generator

__all__ = [
    "DomainError",
    "EntityNotFoundError",
    "EventHarvestError",
    "EventPublicationError",
    "EventStoreError",
    "GiftDeskError",
    "HandlerError",
    "HandlerNotFoundError",
    "HandlerRegistrationError",
    "IIDGenerator",
    "InfrastructureError",
    "InvariantViolationError",
    "NotFoundError",
    "OutOfStockError",
    "PersistenceError",
    "SequentialIdGenerator",
    "SessionManagementError",
    "UUID4Generator",
    "UnitOfWorkError",
    "UnknownEventTypeError",
    "ValidationError",
]
