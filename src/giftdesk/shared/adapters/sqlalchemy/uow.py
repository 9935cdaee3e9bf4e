"""
SQLAlchemy implementation of the Unit of Work pattern.
"""

from __future__ import annotations

import contextlib
import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from ...ports.unit_of_work import UnitOfWork
from ...primitives.exceptions import SessionManagementError, UnitOfWorkError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from types import TracebackType

    from sqlalchemy.ext.asyncio import AsyncSession

    from ...ports.unit_of_work import CommitListener

logger = logging.getLogger("giftdesk.uow")


class SQLAlchemyUnitOfWork(UnitOfWork):
    """
    One database transaction around one command or query.

    Give it either a ``session`` the caller owns, or a ``session_factory``
    (usually an ``async_sessionmaker(engine, expire_on_commit=False)``), in
    which case a session is opened on enter and closed on exit::

        async with SQLAlchemyUnitOfWork(session_factory=factory) as uow:
            await residents.save(resident, uow)

    Repositories reach the session through :attr:`session` and register the
    domain objects they load or save, which is what the event harvester walks
    after the commit.
    """

    def __init__(
        self,
        session: AsyncSession | None = None,
        session_factory: Callable[[], AsyncSession] | None = None,
        *,
        commit_listeners: Iterable[CommitListener] | None = None,
    ) -> None:
        if (session is None) == (session_factory is None):
            raise SessionManagementError(
                "Must provide exactly one of 'session' (caller-managed) or "
                "'session_factory' (self-managed)"
            )
        super().__init__(commit_listeners)
        self._session = session
        self._session_factory = session_factory

    @property
    def owns_session(self) -> bool:
        return self._session_factory is not None

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise UnitOfWorkError("No active session; enter the unit of work first")
        return self._session

    async def __aenter__(self) -> SQLAlchemyUnitOfWork:
        self.rolled_back = False
        if self._session_factory is not None:
            self._session = self._session_factory()
        try:
            if not self.session.in_transaction():
                await self.session.begin()
        except SQLAlchemyError as e:
            await self._close_owned_session()
            raise SessionManagementError(f"Failed to begin transaction: {e}") from e
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        try:
            await super().__aexit__(exc_type, exc_val, exc_tb)
        finally:
            await self._close_owned_session()

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            with contextlib.suppress(SQLAlchemyError, UnitOfWorkError):
                await self.rollback()
            raise UnitOfWorkError(f"Failed to commit transaction: {e}") from e

    async def rollback(self) -> None:
        self.rolled_back = True
        logger.debug("Rolling back SQLAlchemy transaction")
        try:
            if self.session.in_transaction():
                await self.session.rollback()
        except SQLAlchemyError as e:
            raise UnitOfWorkError(f"Failed to rollback transaction: {e}") from e

    async def _close_owned_session(self) -> None:
        if not self.owns_session or self._session is None:
            return
        session, self._session = self._session, None
        try:
            await session.close()
        except SQLAlchemyError as e:
            raise SessionManagementError(f"Failed to close session: {e}") from e
