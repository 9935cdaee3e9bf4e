"""RetryPolicy: how background tasks back off between attempts."""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class RetryPolicy:
    """Exponential backoff with an attempt cap and optional jitter.

    Attempts are 1-based and include the first try, so ``max_attempts=3``
    means one try and two retries. The delay before retry *n* is
    ``base_delay * 2 ** (n - 1)`` capped at ``max_delay``; with *jitter* it
    is scaled by a random factor in ``[0.5, 1.5)``.
    """

    max_attempts: int = 3
    base_delay: float = 0.5
    max_delay: float = 5.0
    jitter: bool = True

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.base_delay < 0 or self.max_delay < 0:
            raise ValueError("base_delay and max_delay must be >= 0")
        if self.base_delay > self.max_delay:
            raise ValueError("base_delay must be <= max_delay")

    def should_retry(self, attempt: int) -> bool:
        return 1 <= attempt < self.max_attempts

    def delay_for_attempt(self, attempt: int) -> float:
        if attempt < 1:
            return 0.0
        delay = min(self.base_delay * 2 ** (attempt - 1), self.max_delay)
        if self.jitter:
            delay *= 0.5 + random.random()  # noqa: S311
        return float(delay)

    def backoff_schedule(self) -> list[float]:
        """Delays before each retry, ignoring jitter (for logs and docs)."""
        return [
            min(self.base_delay * 2 ** (attempt - 1), self.max_delay)
            for attempt in range(1, self.max_attempts)
        ]

    async def wait_before_retry(self, attempt: int) -> None:
        delay = self.delay_for_attempt(attempt)
        if delay > 0:
            await asyncio.sleep(delay)
