"""InMemoryTaskQueue: asyncio-backed background work with retry and dead letters."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ...correlation import correlation_scope
from ...ports.task_queue import ITaskQueue
from ...primitives.exceptions import HandlerNotFoundError, HandlerRegistrationError
from ...retry import RetryPolicy

if TYPE_CHECKING:
    from ...ports.task_queue import ITaskHandler, Task

logger = logging.getLogger("giftdesk.tasks")


@dataclass(frozen=True)
class DeadLetter:
    """A task that exhausted its retries, with the last error."""

    task: Task
    attempts: int
    error: BaseException


class InMemoryTaskQueue(ITaskQueue):
    """Runs tasks in-process through an :class:`asyncio.Queue`.

    Each task type has exactly one handler. A handler that raises is retried
    according to the :class:`RetryPolicy`; once retries are exhausted the
    task lands in :attr:`dead_letters`.

    Tasks are processed either on demand with :meth:`drain` (tests, CLI
    scripts) or continuously by a worker started with :meth:`start`.
    """

    def __init__(self, retry_policy: RetryPolicy | None = None) -> None:
        self._retry_policy = retry_policy or RetryPolicy()
        self._handlers: dict[type[Task], ITaskHandler] = {}
        self._queue: asyncio.Queue[Task] = asyncio.Queue()
        self._worker: asyncio.Task[None] | None = None
        self.completed: list[Task] = []
        self.dead_letters: list[DeadLetter] = []

    # ── Registration ─────────────────────────────────────────────

    def register(self, task_type: type[Task], handler: ITaskHandler) -> None:
        existing = self._handlers.get(task_type)
        if existing is not None and existing is not handler:
            raise HandlerRegistrationError(
                f"Duplicate task handler for {task_type.__name__}"
            )
        self._handlers[task_type] = handler
        logger.debug(
            "Registered task handler for %s (retry delays: %s)",
            task_type.__name__,
            self._retry_policy.backoff_schedule(),
        )

    # ── ITaskQueue ───────────────────────────────────────────────

    async def enqueue(self, task: Task) -> None:
        if type(task) not in self._handlers:
            raise HandlerNotFoundError(type(task))
        await self._queue.put(task)
        logger.debug("Enqueued %s", type(task).__name__)

    # ── Processing ───────────────────────────────────────────────

    async def drain(self) -> int:
        """Process everything currently queued, including retries. Returns count."""
        processed = 0
        while not self._queue.empty():
            task = self._queue.get_nowait()
            try:
                await self._process(task)
            finally:
                self._queue.task_done()
            processed += 1
        return processed

    def start(self) -> None:
        """Start a background worker consuming the queue."""
        if self._worker is None or self._worker.done():
            self._worker = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Wait for queued work to finish, then stop the worker."""
        if self._worker is None:
            return
        await self._queue.join()
        self._worker.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._worker
        self._worker = None

    async def _run(self) -> None:
        while True:
            task = await self._queue.get()
            try:
                await self._process(task)
            finally:
                self._queue.task_done()

    async def _process(self, task: Task) -> None:
        handler = self._handlers[type(task)]
        with correlation_scope(task.correlation_id, task.task_id):
            await self._attempt(handler, task)

    async def _attempt(self, handler: ITaskHandler, task: Task) -> None:
        task_name = type(task).__name__
        attempt = 1
        while True:
            try:
                await handler.handle(task)
            except Exception as exc:
                if not self._retry_policy.should_retry(attempt):
                    logger.error(
                        "%s failed after %d attempt(s), moving to dead letters",
                        task_name,
                        attempt,
                        exc_info=True,
                    )
                    self.dead_letters.append(DeadLetter(task, attempt, exc))
                    return
                logger.warning(
                    "%s failed on attempt %d/%d: %s",
                    task_name,
                    attempt,
                    self._retry_policy.max_attempts,
                    exc,
                )
                await self._retry_policy.wait_before_retry(attempt)
                attempt += 1
            else:
                self.completed.append(task)
                return

    # ── Introspection ────────────────────────────────────────────

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def stats(self) -> dict[str, Any]:
        return {
            "pending": self.pending,
            "completed": len(self.completed),
            "dead_letters": len(self.dead_letters),
        }
