"""Handler Registry with conflict detection."""

from __future__ import annotations

import logging
from typing import Any

from ..primitives.exceptions import HandlerRegistrationError

logger = logging.getLogger(__name__)


class HandlerRegistry:
    """Declarative store for command, query and event handler classes.

    Register handler *classes* here during bootstrapping; the Mediator and
    the event publisher build instances through a handler factory.

    **Conflict detection:** registering a second command handler (or
    query handler) for the same message type raises
    ``HandlerRegistrationError``. Multiple event handlers for the same event
    type are allowed and keep their registration order.
    """

    def __init__(self) -> None:
        self._command_handlers: dict[type[Any], type[Any]] = {}
        self._query_handlers: dict[type[Any], type[Any]] = {}
        self._event_handlers: dict[type[Any], list[type[Any]]] = {}

    # ── Registration ─────────────────────────────────────────────

    def register_command_handler(
        self, command_type: type[Any], handler_cls: type[Any]
    ) -> None:
        self._register_single(self._command_handlers, "command", command_type, handler_cls)

    def register_query_handler(
        self, query_type: type[Any], handler_cls: type[Any]
    ) -> None:
        self._register_single(self._query_handlers, "query", query_type, handler_cls)

    def register_event_handler(
        self, event_type: type[Any], handler_cls: type[Any]
    ) -> None:
        handlers = self._event_handlers.setdefault(event_type, [])
        if handler_cls not in handlers:
            handlers.append(handler_cls)
            logger.debug(
                "Registered event handler %s -> %s",
                event_type.__name__,
                handler_cls.__name__,
            )

    def _register_single(
        self,
        target: dict[type[Any], type[Any]],
        kind: str,
        message_type: type[Any],
        handler_cls: type[Any],
    ) -> None:
        existing = target.get(message_type)
        if existing is not None and existing is not handler_cls:
            msg = (
                f"Duplicate {kind} handler for {message_type.__name__}: "
                f"{existing.__name__} already registered, "
                f"cannot register {handler_cls.__name__}"
            )
            raise HandlerRegistrationError(msg)
        target[message_type] = handler_cls
        logger.debug(
            "Registered %s handler %s -> %s",
            kind,
            message_type.__name__,
            handler_cls.__name__,
        )

    # ── Lookup ───────────────────────────────────────────────────

    def get_command_handler(self, command_type: type[Any]) -> type[Any] | None:
        return self._command_handlers.get(command_type)

    def get_query_handler(self, query_type: type[Any]) -> type[Any] | None:
        return self._query_handlers.get(query_type)

    def get_event_handlers(self, event_type: type[Any]) -> list[type[Any]]:
        return list(self._event_handlers.get(event_type, []))


    # ── Introspection ────────────────────────────────────────────

    def get_registered_handlers(self) -> dict[str, Any]:
        """Return a snapshot of all registered handlers (for debugging)."""
        return {
            "commands": {
                k.__name__: v.__name__ for k, v in self._command_handlers.items()
            },
            "queries": {
                k.__name__: v.__name__ for k, v in self._query_handlers.items()
            },
            "events": {
                k.__name__: [h.__name__ for h in v]
                for k, v in self._event_handlers.items()
            },
        }

    def clear(self) -> None:
        """Clear all registered handlers (testing utility)."""
        self._command_handlers.clear()
        self._query_handlers.clear()
        self._event_handlers.clear()


__all__ = ["HandlerRegistry"]
