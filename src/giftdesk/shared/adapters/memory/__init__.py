"""In-memory adapters for tests and the development profile."""

from __future__ import annotations

from .event_store import InMemoryEventStore
from .mailer import InMemoryMailer, LoggingMailer
from .repository import InMemoryRepository
from .task_queue import DeadLetter, InMemoryTaskQueue
from .unit_of_work import InMemoryUnitOfWork, in_memory_unit_of_work_factory

__all__ = [
    "DeadLetter",
    "InMemoryEventStore",
    "InMemoryMailer",
    "InMemoryRepository",
    "InMemoryTaskQueue",
    "InMemoryUnitOfWork",
    "LoggingMailer",
    "in_memory_unit_of_work_factory",
]
