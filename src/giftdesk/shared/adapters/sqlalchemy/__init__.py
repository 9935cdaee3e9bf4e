"""SQLAlchemy (async) persistence adapters."""

from __future__ import annotations

from .event_store import SQLAlchemyEventStore
from .models import Base, StoredEventModel
from .repository import SQLAlchemyRepository
from .types import JSONType, UTCDateTime
from .uow import SQLAlchemyUnitOfWork

__all__ = [
    "Base",
    "JSONType",
    "SQLAlchemyEventStore",
    "SQLAlchemyRepository",
    "SQLAlchemyUnitOfWork",
    "StoredEventModel",
    "UTCDateTime",
]
