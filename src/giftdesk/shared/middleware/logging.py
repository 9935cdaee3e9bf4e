"""Command timing and outcome logging."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from ..ports.middleware import IMiddleware

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger("giftdesk.middleware")

DEFAULT_SLOW_MS = 500.0


class LoggingMiddleware(IMiddleware):
    """Logs each command on entry and on exit with its duration.

    Commands running longer than *slow_ms* are reported at WARNING level.
    Failures are logged with their traceback and re-raised untouched.
    """

    def __init__(self, *, slow_ms: float = DEFAULT_SLOW_MS) -> None:
        self._slow_ms = slow_ms

    async def __call__(
        self,
        message: Any,
        next_handler: Callable[[Any], Awaitable[Any]],
    ) -> Any:
        name = type(message).__name__
        logger.info(
            "Handling %s (correlation_id=%s, command_id=%s)",
            name,
            getattr(message, "correlation_id", None),
            getattr(message, "command_id", None),
        )
        started = time.perf_counter()
        try:
            result = await next_handler(message)
        except Exception:
            logger.exception("%s failed after %.2fms", name, _elapsed_ms(started))
            raise

        elapsed = _elapsed_ms(started)
        level = logging.WARNING if elapsed >= self._slow_ms else logging.INFO
        logger.log(level, "%s completed in %.2fms", name, elapsed)
        return result


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000
