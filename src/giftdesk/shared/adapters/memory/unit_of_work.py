"""InMemoryUnitOfWork: tracks commit/rollback calls for unit tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...ports.unit_of_work import UnitOfWork

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from ...ports.unit_of_work import CommitListener


class InMemoryUnitOfWork(UnitOfWork):
    """In-memory implementation of UnitOfWork.

    Used with the in-memory repositories, which write straight to their
    dicts; this class only records commit/rollback calls for assertions.
    """

    def __init__(
        self, commit_listeners: Iterable[CommitListener] | None = None
    ) -> None:
        super().__init__(commit_listeners)
        self.committed: bool = False
        self.commit_count: int = 0
        self.rollback_count: int = 0

    async def commit(self) -> None:
        """Record that commit was called."""
        if self.committed or self.rolled_back:
            return
        self.committed = True
        self.commit_count += 1

    async def rollback(self) -> None:
        """Record that rollback was called."""
        if self.committed or self.rolled_back:
            return
        self.rolled_back = True
        self.rollback_count += 1

    # ── Test helpers ─────────────────────────────────────────────

    def reset(self) -> None:
        """Reset commit/rollback tracking (for test setup)."""
        self.committed = False
        self.rolled_back = False
        self.commit_count = 0
        self.rollback_count = 0


def in_memory_unit_of_work_factory(
    commit_listeners: Iterable[CommitListener] | None = None,
) -> Callable[[], InMemoryUnitOfWork]:
    """Return a factory building a fresh UoW per command with *commit_listeners*."""
    listeners = list(commit_listeners or ())

    def factory() -> InMemoryUnitOfWork:
        return InMemoryUnitOfWork(listeners)

    return factory
