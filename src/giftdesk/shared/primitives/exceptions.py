"""Domain and infrastructure exceptions for giftdesk."""

from __future__ import annotations


class GiftDeskError(Exception):
    """Root exception for the entire giftdesk application."""


class DomainError(GiftDeskError):
    """Base class for all domain-related errors."""


class NotFoundError(DomainError):
    """Raised when an aggregate or resource is not found."""


class EntityNotFoundError(NotFoundError):
    """Raised when a specific entity cannot be found by ID."""

    def __init__(self, entity_type: str, entity_id: object) -> None:
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id={entity_id!r} not found")


class InvariantViolationError(DomainError):
    """Raised when a domain invariant is violated."""


class OutOfStockError(DomainError):
    """Raised when a gift with no remaining stock is handed out."""

    def __init__(self, gift_name: str) -> None:
        self.gift_name = gift_name
        super().__init__(f'Cannot attribute gift "{gift_name}" - out of stock')


class ValidationError(GiftDeskError):
    """Raised when command validation fails.

    Carries structured errors: ``{field: [messages]}``.
    """

    def __init__(self, errors: dict[str, list[str]] | str | None = None) -> None:
        if isinstance(errors, str):
            self.errors: dict[str, list[str]] = {"__root__": [errors]}
        elif errors is None:
            self.errors = {}
        else:
            self.errors = errors
        super().__init__(str(self.errors))


# ── Event pipeline ───────────────────────────────────────────────────


class EventStoreError(GiftDeskError):
    """Raised when event-store operations fail."""


class UnknownEventTypeError(EventStoreError):
    """Raised when a stored discriminator has no registered event class."""

    def __init__(self, event_type: str) -> None:
        self.event_type = event_type
        super().__init__(f"Unknown event type {event_type!r}")


class EventPublicationError(GiftDeskError):
    """Base class for errors raised while moving events out of aggregates."""


class EventHarvestError(EventPublicationError):
    """Raised when an entity claiming the event-source capability misbehaves.

    This is a programming error and always propagates out of the unit of work.
    """

    def __init__(self, entity: object, cause: BaseException) -> None:
        self.entity = entity
        self.cause = cause
        super().__init__(
            f"Failed to harvest domain events from {type(entity).__name__}: {cause}"
        )


# ── Infrastructure ───────────────────────────────────────────────────


class InfrastructureError(GiftDeskError):
    """Base class for all infrastructure-related errors."""


class PersistenceError(InfrastructureError):
    """Base class for all persistence-related errors."""


class SessionManagementError(PersistenceError):
    """Raised when session creation or management fails."""


class UnitOfWorkError(PersistenceError):
    """Raised when Unit of Work operations fail."""


# ── Handlers ─────────────────────────────────────────────────────────


class HandlerError(GiftDeskError):
    """Base class for all handler related errors (registration, lookup, execution)."""


class HandlerRegistrationError(HandlerError):
    """Raised when a handler registration conflict is detected.

    Usage: HandlerRegistry raises this when trying to register multiple
    handlers for a command or query type.
    """


class HandlerNotFoundError(HandlerError):
    """Raised when no handler is registered for a dispatched message."""

    def __init__(self, message_type: type[object]) -> None:
        self.message_type = message_type
        super().__init__(f"No handler registered for {message_type.__name__}")


__all__: list[str] = [
    "DomainError",
    "EntityNotFoundError",
    "EventHarvestError",
    "EventPublicationError",
    "EventStoreError",
    "GiftDeskError",
    "HandlerError",
    "HandlerNotFoundError",
    "HandlerRegistrationError",
    "InfrastructureError",
    "InvariantViolationError",
    "NotFoundError",
    "OutOfStockError",
    "PersistenceError",
    "SessionManagementError",
    "UnitOfWorkError",
    "UnknownEventTypeError",
    "ValidationError",
]
