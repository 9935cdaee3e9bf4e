"""Mediator: central dispatch point with ContextVar UoW scope."""

from __future__ import annotations

import logging
from contextvars import ContextVar
from dataclasses import replace
from typing import TYPE_CHECKING, Any, TypeVar, cast

from ..correlation import correlation_scope
from ..middleware.pipeline import build_pipeline
from ..ports.bus import ICommandBus, IQueryBus
from ..primitives.exceptions import HandlerNotFoundError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ..ports.middleware import IMiddleware
    from ..ports.unit_of_work import UnitOfWork
    from .command import Command
    from .handler import CommandHandler, QueryHandler
    from .message import Message
    from .query import Query
    from .registry import HandlerRegistry
    from .response import CommandResponse, QueryResponse

logger = logging.getLogger(__name__)

TResult = TypeVar("TResult")

#: ContextVar tracking the current UoW: ``None`` means we are not inside
#: any command scope yet (root command will create a new one).
_current_uow: ContextVar[Any] = ContextVar("current_uow", default=None)


def get_current_uow() -> UnitOfWork | None:
    """Return the active UoW (or *None* if outside a command scope)."""
    return cast("UnitOfWork | None", _current_uow.get())


class Mediator(ICommandBus, IQueryBus):
    """Routes commands / queries through middleware to their handlers.

    **UoW scope detection:** uses :data:`_current_uow` to decide whether
    the incoming message is a *root* message (needs a fresh UoW) or a
    *nested* one (reuses the parent UoW). The UoW factory is expected to
    return units of work with the domain event harvester already attached,
    so a root command publishes its events exactly once, after its commit.

    Parameters
    ----------
    registry:
        :class:`~giftdesk.shared.cqrs.registry.HandlerRegistry` instance.
    uow_factory:
        Callable returning a fresh ``UnitOfWork`` async-context-manager.
    middlewares:
        Optional command middleware, outermost first.
    handler_factory:
        Optional callable ``(handler_cls) -> handler_instance``.
        Defaults to simple ``handler_cls()`` construction.
    """

    def __init__(
        self,
        registry: HandlerRegistry,
        uow_factory: Callable[[], UnitOfWork],
        *,
        middlewares: list[IMiddleware] | None = None,
        handler_factory: Callable[[type[Any]], Any] | None = None,
    ) -> None:
        self._registry = registry
        self._uow_factory = uow_factory
        self._middlewares: list[IMiddleware] = list(middlewares or [])
        self._handler_factory: Callable[[type[Any]], Any] = handler_factory or (
            lambda cls: cls()
        )

    # ── Public API ───────────────────────────────────────────────

    async def send(self, command: Command[TResult]) -> CommandResponse[TResult]:
        """Dispatch a *command* through the middleware pipeline.

        Root commands open a new UoW and commit/rollback automatically.
        Nested commands reuse the existing UoW (no double-commit).
        """
        command = command.ensure_correlation()
        return await self._in_scope(command, lambda: self._dispatch_command(command))

    async def query(self, query: Query[TResult]) -> QueryResponse[TResult]:
        """Dispatch a *query* (no middleware).

        Root queries run in their own read scope so repositories backed by a
        database session have one to read from.
        """
        query = query.ensure_correlation()
        handler_cls = self._registry.get_query_handler(type(query))
        if handler_cls is None:
            raise HandlerNotFoundError(type(query))
        handler = cast("QueryHandler[Any, TResult]", self._handler_factory(handler_cls))

        result = await self._in_scope(query, lambda: handler.handle(query))
        return cast("QueryResponse[TResult]", self._propagate_ids(query, result))

    # ── Internals ────────────────────────────────────────────────

    async def _in_scope(
        self, message: Message, call: Callable[[], Awaitable[Any]]
    ) -> Any:
        """Run *call* in the active unit of work, opening one for a root message."""
        if _current_uow.get() is not None:
            return await call()

        logger.debug(
            "Opening unit of work for %s (correlation_id=%s)",
            type(message).__name__,
            message.correlation_id,
        )
        with correlation_scope(message.correlation_id):
            async with self._uow_factory() as uow:
                token = _current_uow.set(uow)
                try:
                    return await call()
                finally:
                    _current_uow.reset(token)

    async def _dispatch_command(
        self, command: Command[TResult]
    ) -> CommandResponse[TResult]:
        """Build the middleware chain and invoke the handler."""
        handler_cls = self._registry.get_command_handler(type(command))
        if handler_cls is None:
            raise HandlerNotFoundError(type(command))

        handler = cast("CommandHandler[Any, TResult]", self._handler_factory(handler_cls))
        pipeline = build_pipeline(self._middlewares, handler.handle)
        result = await pipeline(command)
        return cast("CommandResponse[TResult]", self._propagate_ids(command, result))

    @staticmethod
    def _propagate_ids(message: Message, response: Any) -> Any:
        """Stamp *response* with the message's correlation id and, unless the
        handler set one, the message id as causation."""
        return replace(
            response,
            correlation_id=response.correlation_id or message.correlation_id,
            causation_id=response.causation_id or message.message_id,
        )
