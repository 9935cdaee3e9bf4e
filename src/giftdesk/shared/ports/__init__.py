"""Ports (interfaces) of the shared kernel."""

from __future__ import annotations

from .bus import ICommandBus, IMessageBus, IQueryBus
from .event_publisher import (
    IEventHandler,
    IEventPublisher,
    PublicationReport,
    Subscriber,
    SubscriberFailure,
)
from .event_store import IEventStore, StoredEvent
from .mailer import Attachment, EmailMessage, IMailer
from .middleware import IMiddleware
from .task_queue import ITaskHandler, ITaskQueue, Task
from .unit_of_work import CommitListener, UnitOfWork
from .validation import IValidator

__all__ = [
    "Attachment",
    "CommitListener",
    "EmailMessage",
    "ICommandBus",
    "IMessageBus",
    "IEventHandler",
    "IEventPublisher",
    "IEventStore",
    "IMailer",
    "IMiddleware",
    "IQueryBus",
    "ITaskHandler",
    "ITaskQueue",
    "IValidator",
    "PublicationReport",
    "StoredEvent",
    "Subscriber",
    "SubscriberFailure",
    "Task",
    "UnitOfWork",
]
