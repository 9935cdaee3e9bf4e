"""EventTypeRegistry: maps event type names to their classes for hydration."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as PydanticValidationError

from ..primitives.exceptions import EventStoreError, UnknownEventTypeError

if TYPE_CHECKING:
    from .events import DomainEvent


class EventTypeRegistry:
    """Registry for mapping ``event_type_name: str`` → ``Type[DomainEvent]``.

    Used to write a stable discriminator next to each stored payload and to
    reconstruct domain events from it.

    **Explicit registration** is required via ``register(name, cls)``.
    Create instances per application context for isolation.

    Usage::

        registry = EventTypeRegistry()
        registry.register("gift.attributed", GiftAttributed)
        event = registry.hydrate("gift.attributed", payload)
    """

    def __init__(self) -> None:
        self._registry: dict[str, type[DomainEvent]] = {}
        self._names: dict[type[DomainEvent], str] = {}

    def register(self, name: str, event_class: type[DomainEvent]) -> None:
        """Register an event class under *name*."""
        existing = self._registry.get(name)
        if existing is not None and existing is not event_class:
            raise ValueError(
                f"Event type {name!r} already registered for {existing.__name__}"
            )
        self._registry[name] = event_class
        self._names[event_class] = name

    def get(self, event_type: str) -> type[DomainEvent] | None:
        """Look up an event class by type name."""
        return self._registry.get(event_type)

    def has(self, event_type: str) -> bool:
        """Return ``True`` if *event_type* is registered."""
        return event_type in self._registry

    def name_for(self, event_class: type[DomainEvent]) -> str:
        """Return the discriminator registered for *event_class*.

        Raises:
            UnknownEventTypeError: If the class was never registered.
        """
        try:
            return self._names[event_class]
        except KeyError:
            raise UnknownEventTypeError(event_class.__name__) from None

    def hydrate(self, event_type: str, data: dict[str, Any]) -> DomainEvent:
        """Reconstruct a domain event from its type name and payload dict.

        Raises:
            UnknownEventTypeError: If *event_type* is not registered.
            EventStoreError: If the payload no longer validates.
        """
        event_class = self.get(event_type)
        if event_class is None:
            raise UnknownEventTypeError(event_type)

        try:
            return event_class.model_validate(data)
        except PydanticValidationError as exc:
            raise EventStoreError(
                f"Stored payload for {event_type!r} is not valid: {exc}"
            ) from exc

    def list_registered(self) -> list[str]:
        """Return all registered event type names."""
        return list(self._registry.keys())

    def clear(self) -> None:
        """Remove all registrations (testing utility)."""
        self._registry.clear()
        self._names.clear()
