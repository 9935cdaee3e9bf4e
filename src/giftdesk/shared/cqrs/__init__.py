"""CQRS primitives: messages, handlers, registry and mediator."""

from __future__ import annotations

from .command import Command
from .handler import CommandHandler, EventHandler, QueryHandler
from .mediator import Mediator, get_current_uow
from .message import Message
from .query import Query
from .registry import HandlerRegistry
from .response import CommandResponse, QueryResponse

__all__ = [
    "Command",
    "CommandHandler",
    "CommandResponse",
    "EventHandler",
    "HandlerRegistry",
    "Mediator",
    "Message",
    "Query",
    "QueryHandler",
    "QueryResponse",
    "get_current_uow",
]
