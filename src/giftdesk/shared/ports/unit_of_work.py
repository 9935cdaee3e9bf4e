"""UnitOfWork: Abstract base class for the Unit of Work pattern."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from ..domain.aggregate import EventSource

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger("giftdesk.uow")

CommitListener = Callable[["UnitOfWork"], Awaitable[None]]


class UnitOfWork(ABC):
    """
    Abstract base class for Unit of Work implementations.

    Besides commit/rollback the unit of work keeps track of every entity that
    repositories loaded or saved through it (:meth:`register`). After a
    successful commit it hands itself to each *commit listener* so that, for
    instance, the domain event harvester can drain the aggregates it manages.

    **Lifecycle guarantee**: commit happens BEFORE listeners and hooks run,
    and neither runs when the transaction is rolled back.

    Example:
        ```python
        class SQLAlchemyUnitOfWork(UnitOfWork):
            def __init__(self, session):
                super().__init__()
                self._session = session

            async def commit(self):
                await self._session.commit()

            async def rollback(self):
                await self._session.rollback()
        ```
    """

    def __init__(
        self, commit_listeners: Iterable[CommitListener] | None = None
    ) -> None:
        self.rolled_back: bool = False
        self._on_commit_hooks: deque[Callable[[], Awaitable[Any]]] = deque()
        self._commit_listeners: list[CommitListener] = list(commit_listeners or ())
        self._managed: dict[int, object] = {}
        self._identity_map: dict[tuple[type[Any], object], object] = {}

    # ── Managed entities ─────────────────────────────────────────

    def register(self, entity: object) -> None:
        """Track *entity* as managed by this transaction."""
        self._managed.setdefault(id(entity), entity)
        entity_id = getattr(entity, "id", None)
        if entity_id is not None:
            self._identity_map[(type(entity), entity_id)] = entity

    def get_managed(self, entity_type: type[Any], entity_id: object) -> Any | None:
        """Return the instance already loaded for *entity_id*, if any."""
        return self._identity_map.get((entity_type, entity_id))

    def managed_entities(self) -> list[object]:
        """Every entity registered during the transaction, in registration order."""
        return list(self._managed.values())

    def discard_pending_events(self) -> int:
        """Drop the unpublished events of every managed aggregate.

        Called when the transaction does not commit, so that events describing
        changes that never happened cannot leak into a later publication.
        """
        discarded = 0
        for entity in self.managed_entities():
            if isinstance(entity, EventSource) and entity.has_domain_events():
                discarded += len(entity.pull_domain_events())
        if discarded:
            logger.warning(
                "Discarded %d domain event(s) from a rolled back transaction",
                discarded,
            )
        return discarded

    def _forget_managed(self) -> None:
        self._managed.clear()
        self._identity_map.clear()

    # ── Post-commit callbacks ────────────────────────────────────

    def add_commit_listener(self, listener: CommitListener) -> None:
        """Register a listener that receives this UoW after every commit.

        Unlike :meth:`on_commit` hooks, listeners persist across commits and
        their errors propagate to the caller.
        """
        if listener not in self._commit_listeners:
            self._commit_listeners.append(listener)

    def on_commit(self, callback: Callable[[], Awaitable[Any]]) -> None:
        """Register an async callback to be executed after a successful commit.

        Args:
            callback: An async function that takes no arguments.
        """
        self._on_commit_hooks.append(callback)

    async def notify_committed(self) -> None:
        """Run every commit listener in registration order."""
        for listener in list(self._commit_listeners):
            await listener(self)

    async def trigger_commit_hooks(self) -> None:
        """Execute all registered on_commit hooks.

        Called automatically by __aexit__ AFTER commit completes.
        """
        while self._on_commit_hooks:
            callback = self._on_commit_hooks.popleft()
            try:
                await callback()
            except Exception as exc:
                logger.error("Error in on_commit hook: %s", exc, exc_info=True)

    @abstractmethod
    async def commit(self) -> None:
        """Commit the transaction. Must be implemented by subclasses."""
        ...

    @abstractmethod
    async def rollback(self) -> None:
        """Rollback the transaction. Must be implemented by subclasses."""
        ...

    async def __aenter__(self) -> UnitOfWork:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """
        Exit the context manager.

        CRITICAL ORDER:
        1. If successful (exc_type is None): commit() first
        2. Then commit listeners (event harvesting), then one-shot hooks;
           the hooks run even when a listener raises, since the data is
           already committed
        3. If exception, failed commit or an explicit rollback inside the
           block: discard pending events, skip listeners and hooks
        """
        try:
            if exc_type is not None or self.rolled_back:
                if exc_type is not None:
                    await self.rollback()
                self.discard_pending_events()
                self._on_commit_hooks.clear()
                return

            try:
                await self.commit()
            except BaseException:
                self.discard_pending_events()
                self._on_commit_hooks.clear()
                raise

            try:
                await self.notify_committed()
            finally:
                await self.trigger_commit_hooks()
        finally:
            self._forget_managed()


__all__ = ["CommitListener", "UnitOfWork"]
