"""Domain event pipeline: harvesting, publication, serialisation."""

from __future__ import annotations

from .harvester import DomainEventHarvester
from .publisher import InProcessEventPublisher, StoringEventPublisher
from .serialization import EventSerializer

__all__ = [
    "DomainEventHarvester",
    "EventSerializer",
    "InProcessEventPublisher",
    "StoringEventPublisher",
]
