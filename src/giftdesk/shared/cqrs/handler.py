"""Handler base classes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from .command import Command
    from .query import Query
    from .response import CommandResponse, QueryResponse

TCommand = TypeVar("TCommand", bound="Command[Any]")
TQuery = TypeVar("TQuery", bound="Query[Any]")
TResult = TypeVar("TResult")  # Result type
E = TypeVar("E")  # Event type


class CommandHandler(ABC, Generic[TCommand, TResult]):
    """Base class for command handlers.

    Parametrised by the command it handles and the result it answers with,
    so ``handle`` is typed against the concrete command. Handlers must be
    registered explicitly with a ``HandlerRegistry``. They reach the active
    unit of work through :func:`~giftdesk.shared.cqrs.mediator.get_current_uow`.

    Usage::

        class AttributeGiftHandler(CommandHandler[AttributeGift, str]):
            async def handle(self, command: AttributeGift) -> CommandResponse[str]:
                ...
    """

    @abstractmethod
    async def handle(self, command: TCommand) -> CommandResponse[TResult]:
        """Execute the command and return a CommandResponse."""
        ...


class QueryHandler(ABC, Generic[TQuery, TResult]):
    """Base class for query handlers.

    Handlers must be registered explicitly with a ``HandlerRegistry``.
    """

    @abstractmethod
    async def handle(self, query: TQuery) -> QueryResponse[TResult]:
        """Execute the query and return a QueryResponse."""
        ...


class EventHandler(ABC, Generic[E]):
    """Base class for domain-event subscribers.

    Subscribers are registered with the
    :class:`~giftdesk.shared.events.publisher.InProcessEventPublisher` and
    run only after the transaction that recorded the event has committed.

    Usage::

        class GiftAttributedSubscriber(EventHandler[GiftAttributed]):
            async def handle(self, event: GiftAttributed) -> None:
                ...
    """

    @abstractmethod
    async def handle(self, event: E) -> None:
        """React to the domain event."""
        ...
