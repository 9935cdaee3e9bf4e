"""DomainEventHarvester: drains aggregates after commit and publishes once."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..domain.aggregate import EventSource
from ..primitives.exceptions import EventHarvestError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..domain.events import DomainEvent
    from ..ports.event_publisher import IEventPublisher
    from ..ports.unit_of_work import UnitOfWork

logger = logging.getLogger("giftdesk.events")


class DomainEventHarvester:
    """Commit listener that turns recorded events into a single publication.

    Attach it to a unit of work (``uow.add_commit_listener(harvester)`` or
    :meth:`attach`). After every successful commit it:

    1. walks every entity the unit of work manages,
    2. keeps those exposing the :class:`EventSource` capability,
    3. drains each one that has pending events,
    4. calls ``publisher.publish_all`` once with the combined batch.

    Events of one aggregate keep their recorded order. The order between
    aggregates follows the unit of work's traversal and is not guaranteed.

    A failing publisher is logged and swallowed: the data is committed and
    the buffers are already empty, so the next commit starts clean. An entity
    that claims the capability but raises while being drained is a
    programming error and surfaces as :class:`EventHarvestError`.
    """

    def __init__(self, publisher: IEventPublisher) -> None:
        self._publisher = publisher

    def attach(self, uow: UnitOfWork) -> UnitOfWork:
        uow.add_commit_listener(self)
        return uow

    async def __call__(self, uow: UnitOfWork) -> None:
        batch = self.harvest(uow.managed_entities())
        if not batch:
            return

        logger.debug("Publishing %d harvested domain event(s)", len(batch))
        try:
            await self._publisher.publish_all(batch)
        except Exception:
            logger.exception(
                "Publishing %d domain event(s) failed after commit; "
                "data is committed, events were not delivered",
                len(batch),
            )

    def harvest(self, entities: Iterable[object]) -> list[DomainEvent]:
        """Drain every event source in *entities* into one ordered batch."""
        batch: list[DomainEvent] = []
        for entity in entities:
            if not isinstance(entity, EventSource):
                continue
            try:
                if not entity.has_domain_events():
                    continue
                events = entity.pull_domain_events()
            except Exception as exc:
                raise EventHarvestError(entity, exc) from exc
            batch.extend(events)
        return batch
