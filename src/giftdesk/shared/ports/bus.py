"""Dispatch ports: what application services need from the mediator."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from ..cqrs.command import Command
    from ..cqrs.query import Query
    from ..cqrs.response import CommandResponse, QueryResponse

TResult = TypeVar("TResult")


@runtime_checkable
class ICommandBus(Protocol):
    async def send(self, command: Command[TResult]) -> CommandResponse[TResult]:
        """Run *command* in a unit of work and return its response."""
        ...


@runtime_checkable
class IQueryBus(Protocol):
    async def query(self, query: Query[TResult]) -> QueryResponse[TResult]: ...


@runtime_checkable
class IMessageBus(ICommandBus, IQueryBus, Protocol):
    """Both halves, as the mediator provides them."""
