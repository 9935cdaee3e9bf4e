"""InMemoryRepository: dict-backed repository for tests and the demo app."""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

from ...domain.aggregate import Entity

if TYPE_CHECKING:
    import builtins
    from collections.abc import Iterable

    from ...ports.unit_of_work import UnitOfWork

T = TypeVar("T", bound=Entity)  # type: ignore[type-arg]


class InMemoryRepository(Generic[T]):
    """Stores entities in a plain dict keyed by their ``id``.

    Writes are immediate. Every entity saved or handed out through a unit of
    work is registered with it, single lookups and listings alike, which is
    what lets the post-commit harvester find aggregates with pending events
    and lets a rollback discard them.
    """

    def __init__(self) -> None:
        self._store: dict[object, T] = {}

    def _track(self, entities: Iterable[T], uow: UnitOfWork | None) -> builtins.list[T]:
        """Register *entities* with *uow* and return them as a list."""
        tracked = list(entities)
        if uow is not None:
            for entity in tracked:
                uow.register(entity)
        return tracked

    async def save(self, entity: T, uow: UnitOfWork | None = None) -> None:
        self._store[entity.id] = entity
        self._track([entity], uow)

    async def get(self, entity_id: object, uow: UnitOfWork | None = None) -> T | None:
        entity = self._store.get(entity_id)
        if entity is None:
            return None
        self._track([entity], uow)
        return entity

    async def delete(self, entity_id: object, uow: UnitOfWork | None = None) -> None:  # noqa: ARG002
        self._store.pop(entity_id, None)

    async def list_all(self, uow: UnitOfWork | None = None) -> builtins.list[T]:
        return self._track(self._store.values(), uow)

    async def count(self, uow: UnitOfWork | None = None) -> int:  # noqa: ARG002
        return len(self._store)

    # ── Test helpers ─────────────────────────────────────────────

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)
